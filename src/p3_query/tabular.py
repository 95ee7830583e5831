"""
Tab-delimited input and output helpers.

Input files carry one header line (unless ``nohead``) followed by data
lines.  Header names are external (pre-view) names, often qualified by
the object name (``genome.genome_id``).  Multi-valued output values are
joined with a configurable delimiter.
"""

from __future__ import annotations

import re
from itertools import islice
from typing import TYPE_CHECKING, Any, TextIO

from .clauses import Couplet
from .exceptions import ColumnNotFoundError, EmptyInputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from .options import ColumnOptions, DataOptions


DELIMITERS = {"space": " ", "tab": "\t", "comma": ",", "::": "::", "semi": "; "}
SPLIT_PATTERNS = {"space": " ", "tab": r"\t", "comma": ",", "::": "::", "semi": "; "}

_COLUMN_NUMBER = re.compile(r"^-?\d+$")


# ---------------------------------------------------------------------------
# Delimiters
# ---------------------------------------------------------------------------


def resolve_delimiter(name: str | None) -> str:
    """Map a delimiter name to the string placed between multi-values."""
    if not name:
        return ","
    return DELIMITERS.get(name, name)


def resolve_split_pattern(name: str | None) -> str:
    """Map a delimiter name to the pattern used to split multi-values."""
    if not name:
        return ","
    return SPLIT_PATTERNS.get(name, name)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def get_fields(line: str) -> list[str]:
    """Split a tab-delimited line into fields, dropping the line ending."""
    return line.rstrip("\r\n").split("\t")


def _field_at(fields: Sequence[str], index: int) -> str:
    if -len(fields) <= index < len(fields):
        return fields[index]
    return ""


def get_couplets(
    stream: TextIO, col_index: int, batch_size: int
) -> list[Couplet] | None:
    """
    Read the next batch of couplets from ``stream``.

    Returns ``None`` once the stream is exhausted, otherwise up to
    ``batch_size`` couplets keyed on column ``col_index``.
    """
    lines = list(islice(stream, batch_size))
    if not lines:
        return None
    couplets = []
    for line in lines:
        fields = get_fields(line)
        couplets.append(Couplet(_field_at(fields, col_index), fields))
    return couplets


def iter_couplet_batches(
    stream: TextIO, col_index: int, batch_size: int
) -> Iterator[list[Couplet]]:
    while (batch := get_couplets(stream, col_index, batch_size)) is not None:
        yield batch


def get_col(stream: TextIO, col_index: int) -> list[str]:
    """Return one column of every remaining line of ``stream``."""
    return [_field_at(get_fields(line), col_index) for line in stream]


def find_column(
    col: str | int, headers: Sequence[str], optional: bool = False
) -> int | None:
    """
    Return the 0-based index of a column given by number or header name.

    A number is 1-based, so ``0`` selects the last column.  A name matches
    a header exactly or, failing that, the part after the last dot of a
    qualified header.

    Raises:
        ColumnNotFoundError: If a name matches nothing and not ``optional``.
    """
    text = str(col)
    if _COLUMN_NUMBER.match(text):
        return int(text) - 1
    if text in headers:
        return list(headers).index(text)
    for index, header in enumerate(headers):
        if "." in header and header.rsplit(".", 1)[1] == text:
            return index
    if optional:
        return None
    raise ColumnNotFoundError([text])


def process_headers(
    stream: TextIO, options: ColumnOptions, keyless: bool = False
) -> tuple[list[str], int | None]:
    """
    Read the header line and locate the key column.

    Returns:
        The header list and the key column index (``None`` if ``keyless``).

    Raises:
        EmptyInputError: If a header line is expected but the stream is empty.
    """
    if options.nohead:
        headers: list[str] = []
    else:
        line = stream.readline()
        if not line:
            raise EmptyInputError()
        headers = get_fields(line)
    key_col = None if keyless else find_column(options.col, headers)
    return headers, key_col


def find_headers(
    source: TextIO | Sequence[str], file_type: str, *fields: str
) -> tuple[list[str], list[int]]:
    """
    Locate named columns in a header line.

    ``source`` is either a stream positioned at its header line or an
    already-split header list.  Fields match a header exactly, then by the
    part after the last dot; a field that is a plain number is taken as a
    1-based column index.

    Raises:
        ColumnNotFoundError: Naming every field that could not be found.
    """
    if isinstance(source, list | tuple):
        headers = list(source)
    else:
        headers = get_fields(source.readline())  # type: ignore[union-attr]
    found: dict[str, int | None] = dict.fromkeys(fields)
    for index, header in enumerate(headers):
        if header in found:
            found[header] = index
    for index, header in enumerate(headers):
        short = header.rsplit(".", 1)[-1]
        if short in found and found[short] is None:
            found[short] = index
    missing = []
    for name, index in found.items():
        if index is not None:
            continue
        if name.isdigit():
            found[name] = int(name) - 1
        else:
            missing.append(name)
    if missing:
        raise ColumnNotFoundError(missing, file_type)
    return headers, [found[name] for name in fields]  # type: ignore[misc]


def get_cols(source: str | Sequence[str], indices: Sequence[int]) -> list[str]:
    """Pick the given columns out of a line or a field list, in order."""
    fields = get_fields(source) if isinstance(source, str) else source
    return [_field_at(fields, i) for i in indices]


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def format_row(values: Sequence[Any], delim: str = ",") -> str:
    """Render one output line; lists are joined with ``delim``."""
    cells = []
    for value in values:
        if value is None:
            cells.append("")
        elif isinstance(value, list | tuple):
            cells.append(delim.join(str(v) for v in value))
        else:
            cells.append(str(value))
    return "\t".join(cells) + "\n"


def print_cols(values: Sequence[Any], out: TextIO, delim: str = ",") -> None:
    out.write(format_row(values, delim))


def print_rows(
    rows: Iterable[Sequence[Any]], out: TextIO, options: DataOptions
) -> int:
    """
    Write output rows, joining multi-values with the delimiter named by
    ``options.delim``.  Returns the number of rows written.
    """
    delim = resolve_delimiter(options.delim)
    count = 0
    for row in rows:
        out.write(format_row(row, delim))
        count += 1
    return count
