"""
Shared utility functions for the query engine.

These are pure-Python helpers with no infrastructure dependencies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, TypeVar

from .config import MAX_BATCH_SIZE
from .exceptions import InvalidSpecificationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

T = TypeVar("T")

WILDCARD = "*"

_WHITESPACE = re.compile(r"\s+")
_NUMERIC = re.compile(r"^-?\d+(?:\.\d+)?$")


# ---------------------------------------------------------------------------
# Value cleaning
# ---------------------------------------------------------------------------


def clean_value(value: str) -> str:
    """
    Clean up a value for use in a filter clause.

    Parentheses become spaces, whitespace runs collapse to one space, the
    ends are trimmed and single quotes removed.  A value that still holds
    internal whitespace is wrapped in double quotes so the service treats
    it as one token.
    """
    value = value.replace("(", " ").replace(")", " ")
    value = _WHITESPACE.sub(" ", value).strip()
    value = value.replace("'", "")
    if " " in value and not value.startswith('"'):
        value = f'"{value}"'
    return value


def has_wildcard(value: str) -> bool:
    return WILDCARD in value


# ---------------------------------------------------------------------------
# Batching
# ---------------------------------------------------------------------------


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def check_batch_size(size: int) -> None:
    """Reject key batch sizes outside ``1..MAX_BATCH_SIZE``."""
    if not 1 <= size <= MAX_BATCH_SIZE:
        raise InvalidSpecificationError(
            f"Key batch size must be between 1 and {MAX_BATCH_SIZE}, got {size}",
            option="chunk_size",
        )


def distinct(values: Sequence[T]) -> list[T]:
    """Return the values with duplicates removed, keeping first-seen order."""
    return list(dict.fromkeys(values))


# ---------------------------------------------------------------------------
# Value inspection
# ---------------------------------------------------------------------------


def is_empty(value: Any) -> bool:
    """True for ``None``, the empty string and empty lists."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, list | tuple):
        return len(value) == 0
    return False


def is_numeric(value: Any) -> bool:
    return isinstance(value, int | float) or bool(_NUMERIC.match(str(value)))


def match(pattern: str | None, key: Any, *, exact: bool = False) -> bool:
    """
    Test a pattern against a key the way the data API's ``eq`` does.

    - ``None`` pattern: any non-blank key matches.
    - Numeric pattern: numeric equality against a numeric key.
    - ``exact``: string equality.
    - Otherwise: case-insensitive match of the pattern's words against
      any contiguous run of the key's words.
    """
    if pattern is None:
        return key is not None and str(key).strip() != ""
    if key is None:
        return False
    if is_numeric(pattern):
        return is_numeric(key) and float(pattern) == float(key)
    key_text = str(key)
    if exact:
        return pattern == key_text
    pattern_words = pattern.lower().split()
    key_words = key_text.lower().split()
    if not pattern_words:
        return False
    width = len(pattern_words)
    return any(
        key_words[i : i + width] == pattern_words
        for i in range(len(key_words) - width + 1)
    )
