"""
Related-field resolution.

A related column takes its value from a record of another table, joined
on a link field of the primary record.  ``build_link_map`` issues the
secondary queries for a whole set of primary records at once and
returns the ``link value -> data value`` map used during reconstruction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .clauses import FilterClause
from .config import MAX_BATCH_SIZE
from .utils import check_batch_size, chunked, distinct, is_empty

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import IDataTransport, ResultRecord
    from .schema import ObjectSchema, RelatedField

logger = logging.getLogger(__name__)

LinkMap = dict[str, Any]


def collect_link_values(
    records: Sequence[ResultRecord], link_field: str
) -> list[str]:
    """Return the distinct non-empty link values in first-seen order."""
    return distinct(
        [
            str(record[link_field])
            for record in records
            if not is_empty(record.get(link_field))
        ]
    )


def build_link_map(
    transport: IDataTransport,
    related: RelatedField,
    records: Sequence[ResultRecord],
    *,
    multi: bool = False,
    chunk_size: int = MAX_BATCH_SIZE,
) -> LinkMap:
    """
    Map each link value found in ``records`` to its related data value.

    Link values are looked up ``chunk_size`` at a time with one query per
    chunk against the target table.  With ``multi`` every link value maps
    to the list of all matching data values; otherwise the last match wins.
    """
    check_batch_size(chunk_size)
    result: LinkMap = {}
    links = collect_link_values(records, related.link_field)
    select = [related.target_key, related.target_field]
    for chunk in chunked(links, chunk_size):
        logger.debug(
            "Resolving %d link value(s) against %s.%s",
            len(chunk),
            related.target_table,
            related.target_key,
        )
        entries = transport.query(
            related.target_table,
            select,
            FilterClause.membership(related.target_key, chunk),
        )
        for entry in entries:
            key = entry.get(related.target_key)
            if key is None:
                continue
            value = entry.get(related.target_field)
            if multi:
                result.setdefault(str(key), []).append(value)
            else:
                result[str(key)] = value
    return result


def build_related_maps(
    transport: IDataTransport,
    schema: ObjectSchema,
    columns: Sequence[str],
    records: Sequence[ResultRecord],
    *,
    chunk_size: int = MAX_BATCH_SIZE,
) -> dict[str, LinkMap]:
    """Build one link map per related column requested."""
    maps: dict[str, LinkMap] = {}
    for column in distinct(list(columns)):
        related = schema.related.get(column)
        if related is not None:
            maps[column] = build_link_map(
                transport,
                related,
                records,
                multi=schema.is_multi(column),
                chunk_size=chunk_size,
            )
    return maps
