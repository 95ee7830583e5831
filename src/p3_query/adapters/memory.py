"""InMemoryDataTransport - table-backed fake of the data API for unit tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import TransportError
from ..operators import FilterOperator
from ..utils import WILDCARD, is_empty, is_numeric, match

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..clauses import FilterClause
    from ..ports import ResultRecord


@dataclass(frozen=True)
class QueryCall:
    """One recorded ``query`` invocation."""

    table: str
    select: tuple[str, ...]
    clauses: tuple[FilterClause, ...]


def _values(raw: Any) -> list[Any]:
    if is_empty(raw):
        return []
    if isinstance(raw, list | tuple):
        return list(raw)
    return [raw]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _compare(op: FilterOperator, left: Any, right: str) -> bool:
    if is_numeric(left) and is_numeric(right):
        a: Any = float(left)
        b: Any = float(right)
    else:
        a, b = str(left), right
    if op == FilterOperator.LT:
        return bool(a < b)
    if op == FilterOperator.LE:
        return bool(a <= b)
    if op == FilterOperator.GT:
        return bool(a > b)
    return bool(a >= b)


def clause_matches(clause: FilterClause, record: ResultRecord) -> bool:
    """Evaluate one clause against one stored record."""
    if clause.op == FilterOperator.KEYWORD:
        text = _unquote(clause.value)
        return any(
            match(text, v) for raw in record.values() for v in _values(raw)
        )
    values = _values(record.get(clause.field or ""))
    if clause.op == FilterOperator.IN:
        members = {_unquote(m) for m in clause.members()}
        return any(str(v) in members for v in values)
    if clause.op in (FilterOperator.EQ, FilterOperator.NE):
        if clause.value == WILDCARD:
            found = bool(values)
        else:
            pattern = _unquote(clause.value)
            found = any(match(pattern, v) for v in values)
        return found if clause.op == FilterOperator.EQ else not found
    return any(_compare(clause.op, v, clause.value) for v in values)


class InMemoryDataTransport:
    """In-memory implementation of ``IDataTransport``.

    Tables are lists of records keyed by table name.  Every call to
    ``query`` is recorded in ``calls`` so tests can assert on the exact
    requests issued.
    """

    def __init__(
        self,
        tables: dict[str, list[ResultRecord]] | None = None,
        *,
        schemas: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.tables: dict[str, list[ResultRecord]] = {
            name: list(records) for name, records in (tables or {}).items()
        }
        self.schemas: dict[str, dict[str, Any]] = dict(schemas or {})
        self.calls: list[QueryCall] = []
        self.limit: int | None = None

    def add(self, table: str, *records: ResultRecord) -> None:
        self.tables.setdefault(table, []).extend(records)

    def query(
        self,
        table: str,
        select: Sequence[str],
        *clauses: FilterClause,
    ) -> list[ResultRecord]:
        self.calls.append(QueryCall(table, tuple(select), tuple(clauses)))
        results: list[ResultRecord] = []
        for record in self.tables.get(table, []):
            if self.limit is not None and len(results) >= self.limit:
                break
            if all(clause_matches(c, record) for c in clauses):
                results.append(
                    {name: record[name] for name in select if name in record}
                )
        return results

    def set_limit(self, limit: int) -> None:
        self.limit = limit

    def clear_limit(self) -> None:
        self.limit = None

    def fetch_schema(self, table: str) -> dict[str, Any]:
        try:
            return self.schemas[table]
        except KeyError:
            raise TransportError(
                f"No schema for table {table!r}", status_code=404
            ) from None

    def calls_to(self, table: str) -> list[QueryCall]:
        return [call for call in self.calls if call.table == table]

    def reset_calls(self) -> None:
        self.calls.clear()
