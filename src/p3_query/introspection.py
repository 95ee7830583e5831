"""Schema introspection: physical fields merged with derived and related ones."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import TransportError

if TYPE_CHECKING:
    from .ports import IDataTransport
    from .schema import ObjectSchema


class SchemaField(BaseModel):
    """One field of a physical table schema."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    multi_valued: bool = Field(default=False, alias="multiValued")


class TableSchema(BaseModel):
    """The ``schema`` section of a schema document."""

    model_config = ConfigDict(extra="ignore")

    fields: list[SchemaField] = Field(default_factory=list)


class SchemaDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    schema_: TableSchema = Field(alias="schema")


def parse_schema(document: dict[str, Any]) -> list[SchemaField]:
    """Extract the field list from a schema document."""
    try:
        return SchemaDocument.model_validate(document).schema_.fields
    except ValueError as exc:
        raise TransportError(
            "Malformed schema response", explanation=str(exc)
        ) from exc


def list_object_fields(transport: IDataTransport, schema: ObjectSchema) -> list[str]:
    """
    Return the field names of an object, annotated and sorted.

    Physical fields come from the remote schema (`` (multi)`` marks
    multi-valued ones); derived and related fields of the registry are
    appended with `` (derived)`` or `` (related)``.
    """
    names: list[str] = []
    for field in parse_schema(transport.fetch_schema(schema.table)):
        names.append(f"{field.name} (multi)" if field.multi_valued else field.name)
    for column in schema.derived:
        label = f"{column} (derived)"
        names.append(f"{label} (multi)" if schema.is_multi(column) else label)
    for column in schema.related:
        label = f"{column} (related)"
        names.append(f"{label} (multi)" if schema.is_multi(column) else label)
    return sorted(names)
