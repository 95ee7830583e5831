"""
Exception hierarchy for the p3-query engine.

All exceptions inherit from ``P3QueryError`` and provide ``to_dict()``
for structured error reporting.  None of them are recovered locally:
every failure terminates the current request.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class P3QueryError(Exception):
    """Root exception for the entire p3-query toolkit."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidSpecificationError(P3QueryError):
    """A constraint, option, or object name is malformed or conflicting."""

    def __init__(self, message: str, option: str | None = None) -> None:
        self.message = message
        self.option = option
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_SPECIFICATION",
            "message": self.message,
            "option": self.option,
        }


class UnknownObjectError(InvalidSpecificationError):
    """
    Unknown logical object name.

    Provides fuzzy-matched suggestions for likely intended objects.
    """

    def __init__(self, object_name: str, known_objects: list[str]) -> None:
        self.object_name = object_name
        self.known_objects = known_objects
        self.suggestions = get_close_matches(
            object_name, known_objects, n=3, cutoff=0.6
        )

        message = f"Invalid object {object_name!r}."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_OBJECT",
            "object": self.object_name,
            "suggestions": self.suggestions,
            "known_objects": sorted(self.known_objects),
        }


class WildcardKeyError(InvalidSpecificationError):
    """A wildcard (``*``) was found where an exact-match key is required."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cannot specify a wild card (*) in a key value: {key!r}.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "WILDCARD_KEY",
            "message": self.message,
            "key": self.key,
        }


class ColumnNotFoundError(InvalidSpecificationError):
    """One or more required columns are missing from an input file's headers."""

    def __init__(self, columns: list[str], file_type: str = "input") -> None:
        self.columns = columns
        self.file_type = file_type
        if len(columns) == 1:
            message = (
                f"Could not find required column {columns[0]!r} in {file_type} file."
            )
        else:
            message = (
                f"Could not find required columns in {file_type} file: "
                f"{', '.join(columns)}"
            )
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "COLUMN_NOT_FOUND",
            "columns": self.columns,
            "file_type": self.file_type,
        }


class TransportError(P3QueryError):
    """The remote data service returned a non-success response or was unreachable."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        explanation: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.explanation = explanation
        full = message
        if status_code is not None:
            full += f" (HTTP {status_code})"
        if explanation:
            full += f": {explanation}"
        super().__init__(full)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "TRANSPORT_FAILURE",
            "message": self.message,
            "status_code": self.status_code,
            "explanation": self.explanation,
        }


class EmptyInputError(P3QueryError):
    """A required input source produced no header line."""

    def __init__(self, message: str = "Input file is empty.") -> None:
        super().__init__(message)
