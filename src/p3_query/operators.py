from enum import Enum


class FilterOperator(str, Enum):
    """Filter operators understood by the data API."""

    # Relational
    EQ = "eq"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    NE = "ne"

    # Set membership
    IN = "in"

    # Full-text search (field-less)
    KEYWORD = "keyword"


RELATIONAL_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.EQ,
    FilterOperator.LT,
    FilterOperator.LE,
    FilterOperator.GT,
    FilterOperator.GE,
    FilterOperator.NE,
)
