import argparse

import pytest
from pydantic import ValidationError

from p3_query.options import ColumnOptions, DataOptions


def test_defaults() -> None:
    options = DataOptions()
    assert options.attr is None
    assert options.in_ == []
    assert options.delim == "::"
    assert not options.count


def test_in_alias_and_none_lists() -> None:
    options = DataOptions.model_validate({"in": ["host,Human"], "equal": None})
    assert options.in_ == ["host,Human"]
    assert options.equal == []


def test_relational_is_keyed_by_operator() -> None:
    options = DataOptions(equal=["a,1"], ne=["b,2"])
    assert options.relational() == {
        "eq": ["a,1"],
        "lt": [],
        "le": [],
        "gt": [],
        "ge": [],
        "ne": ["b,2"],
    }


def test_from_namespace_ignores_unknown_attributes() -> None:
    namespace = argparse.Namespace(
        attr=["genome_id"], equal=None, keyword="coli", input="data.tbl", limit=10
    )
    options = DataOptions.from_mapping(namespace)
    assert options.attr == ["genome_id"]
    assert options.keyword == "coli"
    assert options.limit == 10


def test_from_mapping_accepts_in_key() -> None:
    options = DataOptions.from_mapping({"in": ["host,Human"], "col": 3})
    assert options.in_ == ["host,Human"]


def test_options_are_frozen() -> None:
    options = DataOptions()
    with pytest.raises(ValidationError):
        options.count = True


def test_negative_limit_is_rejected() -> None:
    with pytest.raises(ValidationError):
        DataOptions(limit=-1)


def test_column_options() -> None:
    assert ColumnOptions().col == 0
    assert ColumnOptions(col="genome.genome_id", nohead=True).nohead
    with pytest.raises(ValidationError):
        ColumnOptions(batch_size=0)
