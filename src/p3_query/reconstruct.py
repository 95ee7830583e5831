"""
Row reconstruction: raw result records -> output rows.

Every requested output column is produced from a record by its rule:
related columns come from a link map built once per record set, derived
and plain columns apply their ``FieldFunction`` to the source values.
Records carrying no data for any requested column are rejected.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import MAX_BATCH_SIZE
from .related import build_related_maps
from .utils import is_empty

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import IDataTransport, ResultRecord
    from .related import LinkMap
    from .schema import ObjectSchema

logger = logging.getLogger(__name__)

OutputRow = list[Any]


class RowReconstructor:
    """Turn the records of one query into output rows for one object."""

    def __init__(
        self,
        transport: IDataTransport,
        schema: ObjectSchema,
        *,
        chunk_size: int = MAX_BATCH_SIZE,
    ) -> None:
        self._transport = transport
        self._schema = schema
        self._chunk_size = chunk_size

    def process(
        self,
        entries: Sequence[ResultRecord],
        columns: Sequence[str] | None,
        row: Sequence[Any] = (),
        *,
        key_field: str | None = None,
        check_id: bool = True,
    ) -> list[OutputRow]:
        """
        Reconstruct output rows from ``entries``.

        Args:
            entries: Records returned by the transport.
            columns: Internal output column names, or ``None`` for a count.
            row: Values prefixed to every output row.
            key_field: Field whose value is put at the front of every row.
            check_id: Skip records whose ID field is empty.

        Returns:
            A single ``[*row, count]`` row in count mode, else one row per
            record that produced data for at least one column.
        """
        id_field = self._schema.id_field if check_id else None
        if columns is None:
            if id_field is None:
                count = len(entries)
            else:
                count = sum(
                    1 for entry in entries if not is_empty(entry.get(id_field))
                )
            return [[*row, count]]
        related_maps = build_related_maps(
            self._transport,
            self._schema,
            columns,
            entries,
            chunk_size=self._chunk_size,
        )
        rows: list[OutputRow] = []
        rejected = 0
        for entry in entries:
            if id_field is not None and is_empty(entry.get(id_field)):
                rejected += 1
                continue
            values, has_data = self._compute_columns(entry, columns, related_maps)
            if not has_data:
                rejected += 1
                continue
            prefix = [entry.get(key_field)] if key_field else []
            rows.append([*prefix, *row, *values])
        if rejected:
            logger.debug(
                "Rejected %d of %d %s record(s) without data",
                rejected,
                len(entries),
                self._schema.name,
            )
        return rows

    def _compute_columns(
        self,
        entry: ResultRecord,
        columns: Sequence[str],
        related_maps: dict[str, LinkMap],
    ) -> tuple[list[Any], bool]:
        values: list[Any] = []
        has_data = False
        for column in columns:
            related = self._schema.related.get(column)
            if related is not None:
                link = entry.get(related.link_field)
                value = None
                if not is_empty(link):
                    value = related_maps[column].get(str(link))
                if value is None:
                    value = ""
                else:
                    has_data = True
                values.append(value)
                continue
            rule = self._schema.rule_for(column)
            sources = []
            for name in rule.sources:
                source = entry.get(name)
                if is_empty(source):
                    sources.append("")
                else:
                    sources.append(source)
                    has_data = True
            values.append(rule.function.apply(sources))
        return values, has_data


def process_entries(
    transport: IDataTransport,
    schema: ObjectSchema,
    entries: Sequence[ResultRecord],
    columns: Sequence[str] | None,
    row: Sequence[Any] = (),
    *,
    key_field: str | None = None,
    chunk_size: int = MAX_BATCH_SIZE,
) -> list[OutputRow]:
    """Shortcut for ``RowReconstructor(...).process(...)``."""
    return RowReconstructor(transport, schema, chunk_size=chunk_size).process(
        entries, columns, row, key_field=key_field
    )
