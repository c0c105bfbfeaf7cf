"""Search execution — Pagination arithmetic, score floor and the search call."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from elasticsearch import TransportError

from indexbridge.adapters.base.exceptions import BackendUnavailable, InvalidRequest
from indexbridge.adapters.elasticsearch.responses import transport_cause
from indexbridge.adapters.elasticsearch.translator import QueryTranslator
from indexbridge.models.result import RawSearchResult

if TYPE_CHECKING:
    from indexbridge.adapters.elasticsearch.resolver import IndexResolver
    from indexbridge.models.query import NativeQuery
    from indexbridge.models.request import SearchRequest

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 50


def page_offset(page: int, per_page: int) -> int:
    """Offset of the first hit on 1-based ``page``."""
    return (page - 1) * per_page


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed for ``total`` hits, counting a final partial page."""
    return -(-total // per_page)


class SearchExecutor:
    """Runs translated searches against one Elasticsearch client.

    Transport failures surface as ``BackendUnavailable`` without retries;
    errors the cluster returns for a well-formed call propagate unchanged.

    Args:
        client: An ``AsyncElasticsearch`` (or compatible) client.
        resolver: Index resolution strategy.
        translator: Query translator, a fresh ``QueryTranslator`` by default.
        min_score: Relevance floor applied to every search.
    """

    def __init__(
        self,
        client: Any,
        resolver: IndexResolver,
        translator: QueryTranslator | None = None,
        min_score: float = DEFAULT_MIN_SCORE,
    ) -> None:
        self._client = client
        self._resolver = resolver
        self._translator = translator or QueryTranslator()
        self._min_score = min_score

    async def search(self, request: SearchRequest) -> RawSearchResult:
        """Single-page search, capped at ``request.limit`` when set."""
        query = self._translator.translate(
            request,
            size=request.limit,
            min_score=self._min_score,
        )
        return await self._execute(request, query)

    async def paginate(self, request: SearchRequest, per_page: int, page: int) -> RawSearchResult:
        """Search for one page and derive the page count from the total.

        Raises:
            InvalidRequest: If ``per_page`` is not positive or ``page`` is below 1.
        """
        if per_page <= 0:
            raise InvalidRequest(f"per_page must be positive, got {per_page}")
        if page < 1:
            raise InvalidRequest(f"page must be 1 or greater, got {page}")

        query = self._translator.translate(
            request,
            from_=page_offset(page, per_page),
            size=per_page,
            min_score=self._min_score,
        )
        result = await self._execute(request, query)
        return result.model_copy(update={"page_count": page_count(result.total, per_page)})

    async def _execute(self, request: SearchRequest, query: NativeQuery) -> RawSearchResult:
        index = self._resolver.resolve(request.index_type)
        body = query.to_body()
        logger.debug("Elasticsearch search on %s: %s", index, body)

        try:
            start = time.monotonic()
            response = await self._client.search(index=index, body=body)
        except TransportError as e:
            raise BackendUnavailable(f"Elasticsearch search on '{index}' failed: {transport_cause(e)}") from e

        result = RawSearchResult.from_response(response)
        logger.debug(
            "Search on %s returned %d of %d hits in %dms",
            index,
            len(result.hits),
            result.total,
            int((time.monotonic() - start) * 1000),
        )
        return result
