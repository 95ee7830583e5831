"""
Filter clause value types.

A ``FilterClause`` is the unit handed to the transport: ``(op, field,
value)`` for relational and membership clauses, ``(keyword, text)`` for
free-text search.  All clauses of a request are ANDed together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from .operators import FilterOperator

if TYPE_CHECKING:
    from collections.abc import Iterable


class Couplet(NamedTuple):
    """An input row tagged with the value of its key column."""

    key: str
    row: list[str]


def format_membership(values: Iterable[str]) -> str:
    """Format values as the parenthesised comma list used by ``in`` clauses."""
    return "(" + ",".join(values) + ")"


@dataclass(frozen=True)
class FilterClause:
    """
    A single query constraint.

    Attributes:
        op: The filter operator.
        field: Internal (post-view) field name; ``None`` for keyword clauses.
        value: The constraint value.  ``in`` clauses carry a parenthesised
            comma list, keyword clauses carry the free text.
    """

    op: FilterOperator
    field: str | None
    value: str

    # -- constructors ----------------------------------------------------------

    @classmethod
    def relational(
        cls, op: FilterOperator | str, field: str, value: str
    ) -> FilterClause:
        return cls(FilterOperator(op), field, value)

    @classmethod
    def eq(cls, field: str, value: str) -> FilterClause:
        return cls(FilterOperator.EQ, field, value)

    @classmethod
    def membership(cls, field: str, values: Iterable[str]) -> FilterClause:
        return cls(FilterOperator.IN, field, format_membership(values))

    @classmethod
    def keyword(cls, text: str) -> FilterClause:
        return cls(FilterOperator.KEYWORD, None, text)

    # -- accessors ---------------------------------------------------------------

    def members(self) -> list[str]:
        """Return the individual values of an ``in`` clause."""
        if self.op != FilterOperator.IN:
            return [self.value]
        inner = self.value
        if inner.startswith("(") and inner.endswith(")"):
            inner = inner[1:-1]
        return inner.split(",") if inner else []

    # -- serialisation -----------------------------------------------------------

    def to_tuple(self) -> tuple[str, ...]:
        if self.op == FilterOperator.KEYWORD:
            return (self.op.value, self.value)
        return (self.op.value, self.field or "", self.value)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"op": self.op.value, "value": self.value}
        if self.field is not None:
            result["field"] = self.field
        return result
