"""IDataTransport - Protocol for the remote data service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .clauses import FilterClause

ResultRecord = dict[str, Any]


@runtime_checkable
class IDataTransport(Protocol):
    """
    Abstract interface to the data API.

    Implementations must raise ``TransportError`` on transport or server
    failure; they never return partial results.
    """

    def query(
        self,
        table: str,
        select: Sequence[str],
        *clauses: FilterClause,
    ) -> list[ResultRecord]:
        """
        Return the records of ``table`` satisfying every clause.

        Each record maps physical field names to values; multi-valued
        fields map to lists.
        """
        ...

    def set_limit(self, limit: int) -> None:
        """Cap the number of records any single query returns."""
        ...

    def clear_limit(self) -> None:
        """Remove the result-size cap."""
        ...

    def fetch_schema(self, table: str) -> dict[str, Any]:
        """Return the physical schema document of ``table``."""
        ...
