"""
DataClient - one entry point bundling transport, schema registry and view.

Example::

    client = DataClient(HttpDataTransport())
    options = DataOptions(attr=["genome_id", "genome_name"], equal=["genus,Buchnera"])
    columns, headers = client.select_clause("genome", options)
    filters = client.build_filter(options)
    rows = client.fetch_data("genome", filters, columns)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

from .catalog import build_default_registry
from .config import EngineConfig
from .fasta import protein_fasta
from .fetch import fetch_data, fetch_data_batch, fetch_data_keyed
from .filters import FilterBuilder
from .introspection import list_object_fields
from .selection import select_clause
from .view import IdentityView, load_view

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .clauses import Couplet, FilterClause
    from .options import DataOptions
    from .ports import IDataTransport
    from .reconstruct import OutputRow
    from .schema import ObjectSchema, SchemaRegistry
    from .view import FieldView

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = "p3_query"


def enable_debug_logging() -> None:
    """Send DEBUG output of the engine to the standard error stream."""
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        package_logger.addHandler(handler)


class DataClient:
    """
    Query the data API by logical object and column names.

    Each ``select_clause`` call sets the view: the file named by the
    options, or else the view given to the constructor.  Filters built
    afterwards use the same view.
    """

    def __init__(
        self,
        transport: IDataTransport,
        *,
        registry: SchemaRegistry | None = None,
        view: FieldView | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.transport = transport
        self.registry = registry if registry is not None else build_default_registry()
        self._base_view: FieldView = view or IdentityView()
        self.view: FieldView = self._base_view
        self.config = config or EngineConfig()

    def schema(self, object_name: str) -> ObjectSchema:
        return self.registry.get(object_name)

    # -- query construction ----------------------------------------------------

    def select_clause(
        self,
        object_name: str,
        options: DataOptions,
        *,
        id_only: bool = False,
        default: Sequence[str] | None = None,
    ) -> tuple[list[str] | None, list[str]]:
        """Resolve the output columns and headers for ``object_name``."""
        schema = self.registry.get(object_name)
        self.view = (
            load_view(options.view) if options.view is not None else self._base_view
        )
        if options.debug:
            enable_debug_logging()
        return select_clause(
            schema,
            options,
            transport=self.transport,
            view=self.view,
            id_only=id_only,
            default=default,
        )

    def build_filter(self, options: DataOptions) -> list[FilterClause]:
        return FilterBuilder(self.view).build(options)

    # -- execution -------------------------------------------------------------

    def fetch_data(
        self,
        object_name: str,
        filters: Sequence[FilterClause],
        columns: Sequence[str] | None,
        key_field: str | None = None,
        couplets: Sequence[Couplet] = (),
    ) -> list[OutputRow]:
        return fetch_data(
            self.transport,
            self.registry.get(object_name),
            filters,
            columns,
            key_field,
            couplets,
            chunk_size=self.config.batch_size,
        )

    def fetch_data_batch(
        self,
        object_name: str,
        filters: Sequence[FilterClause],
        columns: Sequence[str] | None,
        couplets: Sequence[Couplet],
        key_field: str | None = None,
    ) -> list[OutputRow]:
        return fetch_data_batch(
            self.transport,
            self.registry.get(object_name),
            filters,
            columns,
            couplets,
            key_field,
            chunk_size=self.config.batch_size,
        )

    def fetch_data_keyed(
        self,
        object_name: str,
        filters: Sequence[FilterClause],
        columns: Sequence[str] | None,
        keys: Sequence[str],
        key_field: str | None = None,
    ) -> list[OutputRow]:
        return fetch_data_keyed(
            self.transport,
            self.registry.get(object_name),
            filters,
            columns,
            keys,
            key_field,
            chunk_size=self.config.batch_size,
        )

    # -- introspection ---------------------------------------------------------

    def list_object_fields(self, object_name: str) -> list[str]:
        return list_object_fields(self.transport, self.registry.get(object_name))

    def protein_fasta(self, genome_id: str, out: TextIO | str | Path) -> int:
        return protein_fasta(self.transport, genome_id, out, registry=self.registry)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(transport={type(self.transport).__name__}, "
            f"objects={len(self.registry)})"
        )

    def __enter__(self) -> DataClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()
