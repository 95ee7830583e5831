"""
Field-name views.

A view translates between caller-facing (pre-view) field names and the
physical (internal, post-view) names used by the data API.  Filters and
select lists are always translated to internal names; output headers are
never translated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .exceptions import InvalidSpecificationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


@runtime_checkable
class FieldView(Protocol):
    """Bidirectional field-name translation."""

    def to_internal(self, name: str) -> str:
        """Translate one pre-view name to its internal form."""
        ...

    def to_internal_list(self, names: Iterable[str]) -> list[str]:
        """Translate a list of pre-view names to internal form."""
        ...

    def to_external_list(self, names: Iterable[str]) -> list[str]:
        """Translate a list of internal names back to pre-view form."""
        ...


class IdentityView:
    """The null view: every name is its own translation."""

    def to_internal(self, name: str) -> str:
        return name

    def to_internal_list(self, names: Iterable[str]) -> list[str]:
        return list(names)

    def to_external_list(self, names: Iterable[str]) -> list[str]:
        return list(names)


class MappingView:
    """View backed by an ``external -> internal`` mapping.

    Names absent from the mapping translate to themselves in both
    directions.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._to_internal = dict(mapping)
        self._to_external = {v: k for k, v in self._to_internal.items()}

    def to_internal(self, name: str) -> str:
        return self._to_internal.get(name, name)

    def to_internal_list(self, names: Iterable[str]) -> list[str]:
        return [self.to_internal(name) for name in names]

    def to_external_list(self, names: Iterable[str]) -> list[str]:
        return [self._to_external.get(name, name) for name in names]


def load_view(path: str | Path | None) -> FieldView:
    """
    Load a view file, or return the identity view when ``path`` is ``None``.

    A view file holds one ``external<TAB>internal`` pair per line.  Blank
    lines and lines starting with ``#`` are ignored.
    """
    if path is None:
        return IdentityView()
    mapping: dict[str, str] = {}
    view_path = Path(path)
    try:
        text = view_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidSpecificationError(
            f"Could not read view file {view_path}: {exc}", option="view"
        ) from exc
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split("\t")
        if len(parts) != 2:
            raise InvalidSpecificationError(
                f"Invalid view line {lineno} in {view_path}: {line!r}",
                option="view",
            )
        mapping[parts[0].strip()] = parts[1].strip()
    logger.debug("Loaded %d view mapping(s) from %s", len(mapping), view_path)
    return MappingView(mapping)
