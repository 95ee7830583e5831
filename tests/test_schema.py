import logging

import pytest

from p3_query.catalog import CATALOG
from p3_query.exceptions import InvalidSpecificationError, UnknownObjectError
from p3_query.functions import FieldFunction
from p3_query.schema import DerivedField, ObjectSchema, RelatedField, SchemaRegistry
from p3_query.selection import resolve_select_list


def test_derived_field_coerces_function_name() -> None:
    rule = DerivedField("md5", ("sequence",))
    assert rule.function is FieldFunction.MD5


def test_derived_field_rejects_unknown_function() -> None:
    with pytest.raises(InvalidSpecificationError, match="Unknown derived-field function"):
        DerivedField("reverse", ("sequence",))


def test_derived_field_rejects_missing_sources() -> None:
    with pytest.raises(
        InvalidSpecificationError, match="needs at least one source field"
    ):
        DerivedField(FieldFunction.IDENTITY, ())


def test_rule_for_plain_column_is_identity() -> None:
    schema = ObjectSchema("thing", "thing_table", "thing_id")
    rule = schema.rule_for("name")
    assert rule.function is FieldFunction.IDENTITY
    assert rule.sources == ("name",)


def test_registry_get_and_unknown(caplog) -> None:
    caplog.set_level(logging.DEBUG)
    registry = SchemaRegistry([ObjectSchema("genome", "genome", "genome_id")])

    assert registry.get("genome").table == "genome"
    assert registry.has("genome")
    with pytest.raises(UnknownObjectError, match="Did you mean: genome"):
        registry.get("genomes")

    registry.register(ObjectSchema("genome", "genome2", "genome_id"))
    assert registry.get("genome").table == "genome2"
    assert "Replacing schema" in caplog.text


def test_registry_rejects_column_both_derived_and_related() -> None:
    schema = ObjectSchema(
        "thing",
        "thing",
        "id",
        derived={"x": DerivedField(FieldFunction.IDENTITY, ("y",))},
        related={"x": RelatedField("id", "other", "id", "x")},
    )
    with pytest.raises(InvalidSpecificationError, match="both derived and related"):
        SchemaRegistry([schema])


class TestCatalog:
    def test_object_names(self, registry) -> None:
        assert len(registry) == len(CATALOG) == 21
        assert {"genome", "feature", "contig", "taxonomy", "sfvt"} <= set(
            registry.object_names
        )

    def test_feature_maps_to_genome_feature(self, registry) -> None:
        feature = registry.get("feature")
        assert feature.table == "genome_feature"
        assert feature.id_field == "patric_id"
        assert feature.is_related("aa_sequence")
        assert feature.is_derived("ec")
        assert feature.is_multi("ec")

    def test_default_fields_have_no_duplicates(self, registry) -> None:
        for schema in registry:
            assert len(schema.default_fields) == len(set(schema.default_fields))

    def test_related_fields_target_catalog_tables(self, registry) -> None:
        tables = {schema.table for schema in registry} | {"feature_sequence", "pathway"}
        for schema in registry:
            for related in schema.related.values():
                assert related.target_table in tables

    def test_select_list_always_holds_id(self, registry) -> None:
        for schema in registry:
            for columns in ([], list(schema.default_fields), ["nonexistent"]):
                assert schema.id_field in resolve_select_list(schema, columns)
