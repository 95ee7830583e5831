"""
Field selection: output columns, headers, and the physical select list.

``select_clause`` turns the caller's column wishlist (pre-view names)
into internal column names plus untranslated output headers.
``resolve_select_list`` expands internal column names into the minimal
set of physical fields the query must fetch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import InvalidSpecificationError
from .view import IdentityView

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .options import DataOptions
    from .ports import IDataTransport
    from .schema import ObjectSchema
    from .view import FieldView

logger = logging.getLogger(__name__)

COUNT_HEADER = "count"


def resolve_select_list(schema: ObjectSchema, columns: Sequence[str]) -> list[str]:
    """
    Compute the physical fields needed to produce ``columns``.

    A related column needs only its link field, a derived column needs
    all of its source fields, and any other column is fetched as is.
    The object's ID field is always included.  The result is sorted and
    free of duplicates.
    """
    fields: set[str] = {schema.id_field}
    for column in columns:
        related = schema.related.get(column)
        if related is not None:
            fields.add(related.link_field)
        else:
            fields.update(schema.rule_for(column).sources)
    return sorted(fields)


def split_columns(columns: Sequence[str]) -> list[str]:
    """Split comma-joined column tokens into individual names."""
    return [name for token in columns for name in token.split(",") if name]


def select_clause(
    schema: ObjectSchema,
    options: DataOptions,
    *,
    transport: IDataTransport | None = None,
    view: FieldView | None = None,
    id_only: bool = False,
    default: Sequence[str] | None = None,
) -> tuple[list[str] | None, list[str]]:
    """
    Determine the columns to retrieve and their output headers.

    Args:
        schema: Schema of the object being queried.
        options: Parsed data options (``attr``, ``count``, ``limit``).
        transport: Transport whose result-size cap is set from ``limit``.
        view: Field-name view; defaults to the identity view.
        id_only: With no ``attr``, select only the ID column; with an
            explicit ``attr`` list, make sure the ID column is in it.
        default: Internal names used instead of the object's default fields
            when no ``attr`` is given.

    Returns:
        ``(columns, headers)`` where ``columns`` holds internal names, or
        ``None`` when a count was requested (headers is then ``["count"]``).

    Raises:
        InvalidSpecificationError: If both a count and columns are requested.
    """
    view = view or IdentityView()
    columns: list[str] | None
    if options.count:
        if options.attr:
            raise InvalidSpecificationError(
                "Cannot specify both --attr and --count.", option="attr"
            )
        headers = [COUNT_HEADER]
        columns = None
    else:
        if not options.attr:
            if id_only:
                wanted = [schema.id_field]
            elif default:
                wanted = list(default)
            else:
                wanted = list(schema.default_fields)
            wanted = view.to_external_list(wanted)
        else:
            wanted = split_columns(options.attr)
            if id_only:
                id_column = view.to_external_list([schema.id_field])[0]
                if id_column not in wanted:
                    wanted.insert(0, id_column)
        headers = [f"{schema.name}.{name}" for name in wanted]
        columns = view.to_internal_list(wanted)
    if transport is not None:
        if options.limit is not None:
            transport.set_limit(options.limit)
        else:
            transport.clear_limit()
    logger.debug("Selected columns %s for %s", columns, schema.name)
    return columns, headers
