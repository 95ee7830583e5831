"""
Schema registry: logical objects, derived fields, and related fields.

An ``ObjectSchema`` maps a user-friendly object name (``genome``) to its
physical table (``genome``), its ID field, its default output fields and
the specifications of its derived and related fields.  Schemas are
immutable; the registry is populated once and only read thereafter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .exceptions import InvalidSpecificationError, UnknownObjectError
from .functions import FieldFunction

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedField:
    """
    An output column computed from one or more physical fields.

    Attributes:
        function: The function applied to the source values.
        sources: Physical fields whose values feed the function.
    """

    function: FieldFunction
    sources: tuple[str, ...]

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "function", FieldFunction(self.function))
        except ValueError as exc:
            valid = ", ".join(f.value for f in FieldFunction)
            raise InvalidSpecificationError(
                f"Unknown derived-field function {self.function!r}. "
                f"Valid functions: {valid}"
            ) from exc
        if not self.sources:
            raise InvalidSpecificationError(
                f"Function {self.function.value} needs at least one source field"
            )


@dataclass(frozen=True)
class RelatedField:
    """
    An output column resolved through a secondary query.

    Attributes:
        link_field: Field of the primary record holding the join key.
        target_table: Physical table holding the actual values.
        target_key: Key field of the target table matched against the link.
        target_field: Field of the target table supplying the output value.
    """

    link_field: str
    target_table: str
    target_key: str
    target_field: str


@dataclass(frozen=True)
class ObjectSchema:
    """
    Immutable description of one logical object.

    Attributes:
        name: Logical (user-facing) object name.
        table: Physical table name.
        id_field: Identifying key field.
        default_fields: Output fields used when the caller names none.
        derived: Derived-field specifications keyed by output column.
        derived_multi: Derived or related columns producing lists.
        related: Related-field specifications keyed by output column.
    """

    name: str
    table: str
    id_field: str
    default_fields: tuple[str, ...] = ()
    derived: Mapping[str, DerivedField] = field(default_factory=dict)
    derived_multi: frozenset[str] = frozenset()
    related: Mapping[str, RelatedField] = field(default_factory=dict)

    def is_related(self, column: str) -> bool:
        return column in self.related

    def is_derived(self, column: str) -> bool:
        return column in self.derived

    def is_multi(self, column: str) -> bool:
        return column in self.derived_multi

    def rule_for(self, column: str) -> DerivedField:
        """Return the derived rule for a column, plain fields pass through."""
        rule = self.derived.get(column)
        if rule is None:
            return DerivedField(FieldFunction.IDENTITY, (column,))
        return rule


class SchemaRegistry:
    """
    Registry of ``ObjectSchema`` instances keyed by logical object name.

    Usage::

        registry = SchemaRegistry()
        registry.register(ObjectSchema("genome", "genome", "genome_id"))

        schema = registry.get("genome")
    """

    def __init__(self, schemas: Iterable[ObjectSchema] = ()) -> None:
        self._schemas: dict[str, ObjectSchema] = {}
        for schema in schemas:
            self.register(schema)

    # -- registration --------------------------------------------------------

    def register(self, schema: ObjectSchema) -> None:
        """Register a schema, replacing any earlier one of the same name."""
        overlap = set(schema.derived) & set(schema.related)
        if overlap:
            raise InvalidSpecificationError(
                f"Object {schema.name!r} declares {sorted(overlap)} as both "
                f"derived and related"
            )
        if schema.name in self._schemas:
            logger.debug("Replacing schema for object %s", schema.name)
        self._schemas[schema.name] = schema

    # -- look-up -------------------------------------------------------------

    def get(self, name: str) -> ObjectSchema:
        """
        Return the schema for a logical object.

        Raises:
            UnknownObjectError: If the object is not registered.
        """
        schema = self._schemas.get(name)
        if schema is None:
            raise UnknownObjectError(name, list(self._schemas))
        return schema

    def has(self, name: str) -> bool:
        return name in self._schemas

    @property
    def object_names(self) -> list[str]:
        return sorted(self._schemas)

    def __iter__(self) -> Iterator[ObjectSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
