"""
HttpDataTransport - RQL client for the BV-BRC data API.

Each ``query`` is encoded as an RQL expression::

    eq(genus,Buchnera)&in(genome_id,(1.1,2.2))&select(genome_id)&limit(25000,0)

and POSTed to ``{base_url}/{table}``.  Results are paged ``page_size``
records at a time until a short page arrives or the result-size cap is
reached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from ..config import TransportConfig
from ..exceptions import TransportError
from ..operators import FilterOperator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..clauses import FilterClause
    from ..ports import ResultRecord

logger = logging.getLogger(__name__)

RQL_CONTENT_TYPE = "application/rqlquery+x-www-form-urlencoded"
SCHEMA_PARAMS = {
    "http_content-type": "application/solrquery+x-www-form-urlencoded",
    "http_accept": "application/solr+json",
}


def encode_value(value: str) -> str:
    """Percent-encode an RQL argument, keeping wildcards and quotes."""
    return quote(value, safe='*"')


def encode_clause(clause: FilterClause) -> str:
    if clause.op == FilterOperator.KEYWORD:
        return f"keyword({encode_value(clause.value)})"
    field = clause.field or ""
    if clause.op == FilterOperator.IN:
        members = ",".join(encode_value(m) for m in clause.members())
        return f"in({field},({members}))"
    return f"{clause.op.value}({field},{encode_value(clause.value)})"


def encode_query(
    select: Sequence[str],
    clauses: Sequence[FilterClause],
    *,
    limit: int | None = None,
    start: int = 0,
) -> str:
    """Build the RQL query string for one page of a request."""
    parts = [encode_clause(c) for c in clauses]
    if select:
        parts.append(f"select({','.join(select)})")
    if limit is not None:
        parts.append(f"limit({limit},{start})")
    return "&".join(parts)


class HttpDataTransport:
    """
    ``IDataTransport`` over HTTP using httpx.

    The underlying ``httpx.Client`` is created from ``config`` unless one
    is supplied; a supplied client is not closed by ``close()``.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or TransportConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            verify=self.config.verify,
            headers={"User-Agent": self.config.user_agent},
        )
        self.limit: int | None = None

    # -- limit -------------------------------------------------------------------

    def set_limit(self, limit: int) -> None:
        self.limit = limit

    def clear_limit(self) -> None:
        self.limit = None

    # -- requests ----------------------------------------------------------------

    def query(
        self,
        table: str,
        select: Sequence[str],
        *clauses: FilterClause,
    ) -> list[ResultRecord]:
        logger.debug(
            "Querying %s with %d clause(s), selecting %d field(s)",
            table,
            len(clauses),
            len(select),
        )
        results: list[ResultRecord] = []
        page_size = self.config.page_size
        while True:
            wanted = page_size
            if self.limit is not None:
                wanted = min(wanted, self.limit - len(results))
                if wanted <= 0:
                    break
            body = encode_query(select, clauses, limit=wanted, start=len(results))
            page = self._post(table, body)
            results.extend(page[:wanted])
            if len(page) < wanted:
                break
        logger.debug("Received %d record(s) from %s", len(results), table)
        return results

    def fetch_schema(self, table: str) -> dict[str, Any]:
        response = self._send("GET", f"/{table}/schema", params=SCHEMA_PARAMS)
        document = self._json(response, table)
        if not isinstance(document, dict):
            raise TransportError(f"Unexpected schema response for {table!r}")
        return document

    def _post(self, table: str, body: str) -> list[ResultRecord]:
        response = self._send(
            "POST",
            f"/{table}",
            content=body,
            headers={
                "Content-Type": RQL_CONTENT_TYPE,
                "Accept": "application/json",
            },
        )
        records = self._json(response, table)
        if not isinstance(records, list):
            raise TransportError(f"Unexpected response for {table!r}")
        return records

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {url} failed", explanation=str(exc)
            ) from exc
        if response.is_error:
            logger.error(
                "Data API error: %s %s -> %d", method, url, response.status_code
            )
            raise TransportError(
                f"Request to {url} failed",
                status_code=response.status_code,
                explanation=response.text.strip() or response.reason_phrase,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response, table: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON in response for {table!r}", explanation=str(exc)
            ) from exc

    # -- lifecycle ---------------------------------------------------------------

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpDataTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
