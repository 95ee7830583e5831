import pytest

from p3_query.adapters.memory import InMemoryDataTransport
from p3_query.exceptions import TransportError
from p3_query.introspection import list_object_fields, parse_schema


def test_parse_schema() -> None:
    fields = parse_schema(
        {
            "responseHeader": {"status": 0},
            "schema": {
                "name": "genome_feature",
                "fields": [
                    {"name": "patric_id", "type": "string"},
                    {"name": "go", "type": "string", "multiValued": True},
                ],
            },
        }
    )
    assert [(f.name, f.multi_valued) for f in fields] == [
        ("patric_id", False),
        ("go", True),
    ]


def test_parse_schema_rejects_malformed_document() -> None:
    with pytest.raises(TransportError, match="Malformed schema response"):
        parse_schema({"error": "nope"})


def test_feature_fields_are_annotated(registry) -> None:
    transport = InMemoryDataTransport(
        schemas={
            "genome_feature": {
                "schema": {
                    "fields": [
                        {"name": "patric_id"},
                        {"name": "product"},
                        {"name": "go", "multiValued": True},
                    ]
                }
            }
        }
    )

    fields = list_object_fields(transport, registry.get("feature"))

    assert fields == [
        "aa_sequence (related)",
        "ec (derived) (multi)",
        "function (derived)",
        "go (multi)",
        "na_sequence (related)",
        "pathway (related) (multi)",
        "patric_id",
        "product",
        "subsystem (related) (multi)",
    ]


def test_schema_fetch_failure_propagates(registry) -> None:
    with pytest.raises(TransportError):
        list_object_fields(InMemoryDataTransport(), registry.get("genome"))
