"""
Derived-field functions.

Each derived output column is computed by one member of the closed
``FieldFunction`` enum from the values of its declared source fields.
Function names are resolved when a schema is registered, so an unknown
name can never reach evaluation.
"""

from __future__ import annotations

import hashlib
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

# EC numbers appear in functional assignments as "(EC 1.1.1.1)" or "(EC:2.7.-.-)".
EC_PATTERN = re.compile(
    r"\(\s*E\.?C\.?(?:\s+|:)(\d\.(?:\d+|-)\.(?:\d+|-)\.(?:n?\d+|-))\s*\)"
)


def _identity(values: Sequence[Any]) -> Any:
    return values[0]


def _concat_semi(values: Sequence[Any]) -> str:
    value = values[0]
    if isinstance(value, list | tuple):
        return "; ".join(str(v) for v in value)
    return str(value)


def _md5(values: Sequence[Any]) -> str:
    return hashlib.md5(str(values[0]).upper().encode("utf-8")).hexdigest()


def _ec_parse(values: Sequence[Any]) -> list[str]:
    return parse_ec_numbers(values[0])


def parse_ec_numbers(product: Any) -> list[str]:
    """Return the distinct EC numbers in a functional assignment, sorted."""
    if not product:
        return []
    return sorted(set(EC_PATTERN.findall(str(product))))


class FieldFunction(str, Enum):
    """Supported derived-field functions."""

    IDENTITY = "identity"
    CONCAT_SEMI = "concat_semi"
    MD5 = "md5"
    EC_PARSE = "ec_parse"

    def apply(self, values: Sequence[Any]) -> Any:
        """Compute the output value from the source field values."""
        return _IMPLEMENTATIONS[self](values)


_IMPLEMENTATIONS: dict[FieldFunction, Callable[[Sequence[Any]], Any]] = {
    FieldFunction.IDENTITY: _identity,
    FieldFunction.CONCAT_SEMI: _concat_semi,
    FieldFunction.MD5: _md5,
    FieldFunction.EC_PARSE: _ec_parse,
}
