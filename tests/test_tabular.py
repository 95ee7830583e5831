import io

import pytest

from p3_query.clauses import Couplet
from p3_query.exceptions import ColumnNotFoundError, EmptyInputError
from p3_query.options import ColumnOptions, DataOptions
from p3_query.tabular import (
    find_column,
    find_headers,
    format_row,
    get_col,
    get_cols,
    get_couplets,
    get_fields,
    iter_couplet_batches,
    print_cols,
    print_rows,
    process_headers,
    resolve_delimiter,
    resolve_split_pattern,
)

INPUT = (
    "genome.genome_id\tgenome.genome_name\tcount\n"
    "83333.1\tEscherichia coli\t4\n"
    "107806.10\tBuchnera aphidicola\t2\r\n"
    "118101.4\tBuchnera aphidicola Bp\t1\n"
)


def test_get_fields_strips_line_ending() -> None:
    assert get_fields("a\tb\t\r\n") == ["a", "b", ""]


def test_process_headers_by_name() -> None:
    stream = io.StringIO(INPUT)
    headers, key_col = process_headers(stream, ColumnOptions(col="genome_id"))
    assert headers == ["genome.genome_id", "genome.genome_name", "count"]
    assert key_col == 0


def test_process_headers_default_is_last_column() -> None:
    _, key_col = process_headers(io.StringIO(INPUT), ColumnOptions())
    assert key_col == -1


def test_process_headers_keyless_and_nohead() -> None:
    stream = io.StringIO(INPUT)
    headers, key_col = process_headers(stream, ColumnOptions(nohead=True), keyless=True)
    assert headers == []
    assert key_col is None
    assert stream.readline().startswith("genome.genome_id")


def test_process_headers_empty_input() -> None:
    with pytest.raises(EmptyInputError):
        process_headers(io.StringIO(""), ColumnOptions())


def test_find_column() -> None:
    headers = ["genome.genome_id", "genome.genome_name", "count"]
    assert find_column("2", headers) == 1
    assert find_column(3, headers) == 2
    assert find_column("count", headers) == 2
    assert find_column("genome_name", headers) == 1
    assert find_column("missing", headers, optional=True) is None
    with pytest.raises(ColumnNotFoundError, match="'missing'"):
        find_column("missing", headers)


def test_get_couplets_in_batches() -> None:
    stream = io.StringIO(INPUT)
    process_headers(stream, ColumnOptions(col=1))

    first = get_couplets(stream, 0, 2)
    second = get_couplets(stream, 0, 2)

    assert first == [
        Couplet("83333.1", ["83333.1", "Escherichia coli", "4"]),
        Couplet("107806.10", ["107806.10", "Buchnera aphidicola", "2"]),
    ]
    assert second == [Couplet("118101.4", ["118101.4", "Buchnera aphidicola Bp", "1"])]
    assert get_couplets(stream, 0, 2) is None


def test_iter_couplet_batches() -> None:
    stream = io.StringIO(INPUT)
    stream.readline()
    batches = list(iter_couplet_batches(stream, -1, 2))
    assert [[c.key for c in batch] for batch in batches] == [["4", "2"], ["1"]]


def test_get_col() -> None:
    stream = io.StringIO(INPUT)
    stream.readline()
    assert get_col(stream, 1) == [
        "Escherichia coli",
        "Buchnera aphidicola",
        "Buchnera aphidicola Bp",
    ]


def test_find_headers() -> None:
    headers, cols = find_headers(io.StringIO(INPUT), "genome", "count", "genome_id", "1")
    assert headers[0] == "genome.genome_id"
    assert cols == [2, 0, 0]


def test_find_headers_reports_every_missing_column() -> None:
    with pytest.raises(ColumnNotFoundError) as exc_info:
        find_headers(["a", "b"], "feature", "x", "a", "y")
    assert exc_info.value.columns == ["x", "y"]
    assert "feature file" in str(exc_info.value)


def test_get_cols() -> None:
    assert get_cols("a\tb\tc\n", [2, 0]) == ["c", "a"]
    assert get_cols(["a", "b"], [1, 5]) == ["b", ""]


def test_format_and_print_rows() -> None:
    out = io.StringIO()
    print_cols(["83333.1", ["1.1.1.3", "2.7.2.4"], None, 11], out, "::")
    assert out.getvalue() == "83333.1\t1.1.1.3::2.7.2.4\t\t11\n"
    assert format_row([["a", "b"]]) == "a,b\n"


@pytest.mark.parametrize(
    ("delim", "joined"),
    [
        ("::", "1.1.1.3::2.7.2.4"),
        ("semi", "1.1.1.3; 2.7.2.4"),
        ("comma", "1.1.1.3,2.7.2.4"),
    ],
)
def test_print_rows_uses_option_delimiter(delim: str, joined: str) -> None:
    out = io.StringIO()
    rows = [["83333.1", ["1.1.1.3", "2.7.2.4"]], ["118101.4", []]]

    written = print_rows(rows, out, DataOptions(delim=delim))

    assert written == 2
    assert out.getvalue() == f"83333.1\t{joined}\n118101.4\t\n"


@pytest.mark.parametrize(
    ("name", "delim", "pattern"),
    [
        ("space", " ", " "),
        ("tab", "\t", r"\t"),
        ("comma", ",", ","),
        ("semi", "; ", "; "),
        ("::", "::", "::"),
        ("|", "|", "|"),
        (None, ",", ","),
    ],
)
def test_delimiters(name, delim: str, pattern: str) -> None:
    assert resolve_delimiter(name) == delim
    assert resolve_split_pattern(name) == pattern
