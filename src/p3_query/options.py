"""
Data-retrieval options.

``DataOptions`` is the parsed form of the common data-retrieval switches
(``--attr``, ``--count``, ``--eq``, ``--in``, ``--keyword`` ...).  How the
switches are declared and parsed is up to the calling tool; the engine
only consumes the resulting immutable model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataOptions(BaseModel):
    """
    Options that shape a data query.

    Attributes:
        attr: Requested output columns (pre-view names, may be comma-joined).
        count: Return a record count instead of records.
        equal, lt, le, gt, ge, ne: Relational constraints ``field,value``.
        in_: Membership constraints ``field,value1,value2,...``.
        keyword: Free-text search across whole records.
        required: Fields that must have a value.
        limit: Result-size cap passed to the transport.
        debug: Enable DEBUG logging for the engine.
        view: Path of a view file for field-name translation.
        delim: Delimiter name joining multi-valued output fields, applied
            by ``tabular.print_rows``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    attr: list[str] | None = None
    count: bool = False
    equal: list[str] = Field(default_factory=list)
    lt: list[str] = Field(default_factory=list)
    le: list[str] = Field(default_factory=list)
    gt: list[str] = Field(default_factory=list)
    ge: list[str] = Field(default_factory=list)
    ne: list[str] = Field(default_factory=list)
    in_: list[str] = Field(default_factory=list, alias="in")
    keyword: str | None = None
    required: list[str] = Field(default_factory=list)
    limit: int | None = Field(default=None, ge=0)
    debug: bool = False
    view: str | None = None
    delim: str = "::"

    @field_validator(
        "equal", "lt", "le", "gt", "ge", "ne", "in_", "required", mode="before"
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def relational(self) -> dict[str, list[str]]:
        """Return the relational constraints keyed by operator name."""
        return {
            "eq": self.equal,
            "lt": self.lt,
            "le": self.le,
            "gt": self.gt,
            "ge": self.ge,
            "ne": self.ne,
        }

    @classmethod
    def from_mapping(cls, source: Any) -> DataOptions:
        """Build options from a dict or an ``argparse.Namespace``-like object."""
        data = source if isinstance(source, dict) else vars(source)
        known = {
            key: value
            for key, value in data.items()
            if key in cls.model_fields or key == "in"
        }
        return cls.model_validate(known)


class ColumnOptions(BaseModel):
    """
    Options locating the key column of a tab-delimited input.

    Attributes:
        col: 1-based column number or header name; ``0`` means the last column.
        batch_size: Maximum number of input lines read per batch.
        nohead: The input has no header line.
    """

    model_config = ConfigDict(frozen=True)

    col: str | int = 0
    batch_size: int = Field(default=100, ge=1)
    nohead: bool = False
