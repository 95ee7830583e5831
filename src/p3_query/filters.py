"""
FilterBuilder - constraint specifications -> filter clauses.

Constraint specifications arrive with pre-view field names; every clause
produced carries the internal (post-view) field name.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .clauses import FilterClause
from .exceptions import InvalidSpecificationError
from .operators import RELATIONAL_OPERATORS, FilterOperator
from .utils import WILDCARD, clean_value
from .view import IdentityView

if TYPE_CHECKING:
    from .options import DataOptions
    from .view import FieldView

logger = logging.getLogger(__name__)

_RELATIONAL_SPEC = re.compile(r"^\s*(\w+),(.+)$", re.DOTALL)
_FIELD_NAME = re.compile(r"^\w+$")


class FilterBuilder:
    """Build the filter clause list for a data query."""

    def __init__(self, view: FieldView | None = None) -> None:
        self._view = view or IdentityView()

    def build(self, options: DataOptions) -> list[FilterClause]:
        """
        Return the clauses for every constraint in ``options``.

        The clauses are ANDed by the transport; their order is not
        significant.

        Raises:
            InvalidSpecificationError: On a malformed relational constraint
                or an invalid field name in an ``in`` or ``required``
                constraint.
        """
        clauses: list[FilterClause] = []
        relational = options.relational()
        for op in RELATIONAL_OPERATORS:
            for spec in relational[op.value]:
                clauses.append(self.relational(op, spec))
        for spec in options.in_:
            clauses.append(self.membership(spec))
        for field in options.required:
            clauses.append(self.required(field))
        if options.keyword:
            clauses.append(FilterClause.keyword(options.keyword))
        logger.debug("Built %d filter clause(s)", len(clauses))
        return clauses

    # -- individual constraint kinds -------------------------------------------

    def relational(self, op: FilterOperator, spec: str) -> FilterClause:
        """Parse a ``field,value`` constraint for a relational operator."""
        m = _RELATIONAL_SPEC.match(spec)
        if m is None:
            raise InvalidSpecificationError(
                f"Invalid --{op.value} specification {spec!r}.", option=op.value
            )
        field, value = m.group(1), clean_value(m.group(2))
        return FilterClause.relational(op, self._view.to_internal(field), value)

    def membership(self, spec: str) -> FilterClause:
        """Parse a ``field,value1,...,valueN`` constraint."""
        field, *values = spec.split(",")
        if not _FIELD_NAME.match(field):
            raise InvalidSpecificationError(
                f"Invalid field name {field!r} for in-specification.", option="in"
            )
        values = [v for v in values if v != ""]
        if not values:
            raise InvalidSpecificationError(
                f"No values in in-specification {spec!r}.", option="in"
            )
        return FilterClause.membership(self._view.to_internal(field), values)

    def required(self, field: str) -> FilterClause:
        """Lower a required-field constraint to ``eq field *``."""
        if not _FIELD_NAME.match(field):
            raise InvalidSpecificationError(
                f"Invalid field name {field!r} for required-specification.",
                option="required",
            )
        return FilterClause.eq(self._view.to_internal(field), WILDCARD)


def build_filter(
    options: DataOptions, view: FieldView | None = None
) -> list[FilterClause]:
    """Shortcut for ``FilterBuilder(view).build(options)``."""
    return FilterBuilder(view).build(options)
