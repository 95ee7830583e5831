"""
Query execution strategies.

Three request patterns share the same select/filter construction:

- ``fetch_data``: one unkeyed query, or one exact-match query per couplet.
- ``fetch_data_batch``: couplet keys matched with ``in`` clauses, results
  regrouped onto the couplets in input order.
- ``fetch_data_keyed``: a flat key list queried a chunk at a time.

Every column and field name passed here is internal (post-view).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .clauses import FilterClause
from .config import MAX_BATCH_SIZE
from .exceptions import InvalidSpecificationError, WildcardKeyError
from .reconstruct import RowReconstructor
from .selection import resolve_select_list
from .utils import check_batch_size, chunked, clean_value, distinct, has_wildcard

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .clauses import Couplet
    from .ports import IDataTransport
    from .reconstruct import OutputRow
    from .schema import ObjectSchema

logger = logging.getLogger(__name__)


def _select_fields(
    schema: ObjectSchema,
    columns: Sequence[str] | None,
    key_field: str | None = None,
) -> list[str]:
    if columns is None:
        selected = [schema.id_field]
    else:
        selected = resolve_select_list(schema, columns)
    if key_field is not None and key_field not in selected:
        selected.insert(0, key_field)
    return selected


def _check_wildcards(keys: Sequence[str]) -> None:
    for key in keys:
        if has_wildcard(key):
            raise WildcardKeyError(key)


def fetch_data(
    transport: IDataTransport,
    schema: ObjectSchema,
    filters: Sequence[FilterClause],
    columns: Sequence[str] | None,
    key_field: str | None = None,
    couplets: Sequence[Couplet] = (),
    *,
    chunk_size: int = MAX_BATCH_SIZE,
) -> list[OutputRow]:
    """
    Return the requested columns of every record matching ``filters``.

    Without ``key_field`` a single query is issued.  With ``key_field``
    each couplet is queried separately with an exact match on its key,
    and its input row is prefixed to each resulting output row.

    Raises:
        WildcardKeyError: If a couplet key contains a wildcard.
    """
    check_batch_size(chunk_size)
    selected = _select_fields(schema, columns)
    reconstructor = RowReconstructor(transport, schema, chunk_size=chunk_size)
    rows: list[OutputRow] = []
    if key_field is None:
        entries = transport.query(schema.table, selected, *filters)
        rows.extend(reconstructor.process(entries, columns))
    else:
        for couplet in couplets:
            if has_wildcard(couplet.key):
                raise WildcardKeyError(couplet.key)
            key_clause = FilterClause.eq(key_field, clean_value(couplet.key))
            entries = transport.query(schema.table, selected, key_clause, *filters)
            rows.extend(reconstructor.process(entries, columns, couplet.row))
    logger.info("Fetched %d %s row(s)", len(rows), schema.name)
    return rows


def fetch_data_batch(
    transport: IDataTransport,
    schema: ObjectSchema,
    filters: Sequence[FilterClause],
    columns: Sequence[str] | None,
    couplets: Sequence[Couplet],
    key_field: str | None = None,
    *,
    chunk_size: int = MAX_BATCH_SIZE,
) -> list[OutputRow]:
    """
    Return the requested columns for records whose key matches a couplet.

    Keys are matched exactly with ``in`` clauses.  Each couplet produces
    one output row per matching record (its input row followed by the
    record's columns), in couplet order; unmatched couplets produce none.

    Raises:
        WildcardKeyError: If a couplet key contains a wildcard.
        InvalidSpecificationError: If a count is requested or
            ``chunk_size`` is above ``MAX_BATCH_SIZE``.
    """
    check_batch_size(chunk_size)
    if columns is None:
        raise InvalidSpecificationError(
            "Counts are not supported for batched key matching.", option="count"
        )
    key_field = key_field or schema.id_field
    cleaned = [clean_value(c.key) for c in couplets]
    blank = sum(1 for k in cleaned if not k)
    if blank:
        logger.warning("Dropped %d couplet(s) with an empty key", blank)
    keys = distinct([k for k in cleaned if k])
    if not keys:
        return []
    _check_wildcards(keys)
    selected = _select_fields(schema, columns, key_field)
    reconstructor = RowReconstructor(transport, schema, chunk_size=chunk_size)
    groups: dict[str, list[list[Any]]] = {}
    for chunk in chunked(keys, chunk_size):
        key_clause = FilterClause.membership(key_field, chunk)
        entries = transport.query(schema.table, selected, key_clause, *filters)
        tagged = reconstructor.process(entries, columns, key_field=key_field)
        for key_value, *data in tagged:
            for key in _group_keys(key_value):
                groups.setdefault(key, []).append(data)
    rows: list[OutputRow] = []
    for couplet in couplets:
        for data in groups.get(_lookup_key(couplet.key), []):
            rows.append([*couplet.row, *data])
    logger.info(
        "Matched %d %s row(s) for %d couplet(s)", len(rows), schema.name, len(couplets)
    )
    return rows


def fetch_data_keyed(
    transport: IDataTransport,
    schema: ObjectSchema,
    filters: Sequence[FilterClause],
    columns: Sequence[str] | None,
    keys: Sequence[str],
    key_field: str | None = None,
    *,
    chunk_size: int = MAX_BATCH_SIZE,
) -> list[OutputRow]:
    """
    Return the requested columns for records whose key is in ``keys``.

    Keys are queried ``chunk_size`` at a time to bound the request size.
    Rows follow chunk order, then the transport's order within a chunk.
    In count mode a single row with the total count is returned.

    Raises:
        WildcardKeyError: If a key contains a wildcard.
        InvalidSpecificationError: If ``chunk_size`` is above
            ``MAX_BATCH_SIZE``.
    """
    check_batch_size(chunk_size)
    key_field = key_field or schema.id_field
    _check_wildcards(keys)
    selected = _select_fields(schema, columns, key_field)
    reconstructor = RowReconstructor(transport, schema, chunk_size=chunk_size)
    rows: list[OutputRow] = []
    total = 0
    for chunk in chunked(keys, chunk_size):
        logger.debug("Querying %s for %d key(s)", schema.table, len(chunk))
        key_clause = FilterClause.membership(key_field, chunk)
        entries = transport.query(schema.table, selected, key_clause, *filters)
        if columns is None:
            total += reconstructor.process(entries, None)[0][-1]
        else:
            rows.extend(reconstructor.process(entries, columns))
    if columns is None:
        return [[total]]
    logger.info("Fetched %d %s row(s) for %d key(s)", len(rows), schema.name, len(keys))
    return rows


def _group_keys(value: Any) -> list[str]:
    if isinstance(value, list | tuple):
        return [str(v) for v in value]
    return [str(value)]


def _lookup_key(key: str) -> str:
    return clean_value(key).strip('"')
