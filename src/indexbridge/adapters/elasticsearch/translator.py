"""Query translation — SearchRequest to Elasticsearch query DSL.

The produced body always has the shape::

    {
      "query": {"bool": {
          "must": [{"query_string": {...}}, {"match_phrase": {...}}, ...],
          "should": {"multi_match": {"query": ..., "fields": ["title^3", ...]}},
      }},
      "sort": ["_score", {"field": {"order": "asc"}}, ...],
      "track_scores": true,
    }

Relevance always sorts first; caller sort keys only break ties. Boosts go
into ``should`` so they raise scores without making the boosted fields
mandatory.
"""

from __future__ import annotations

from typing import Any

from indexbridge.adapters.base.exceptions import InvalidRequest
from indexbridge.models.query import NativeQuery
from indexbridge.models.request import SearchRequest

MATCH_ALL_QUERY = "*"


class QueryTranslator:
    """Stateless builder of ``NativeQuery`` documents."""

    def translate(
        self,
        request: SearchRequest,
        *,
        from_: int | None = None,
        size: int | None = None,
        min_score: float | None = None,
    ) -> NativeQuery:
        """Translate ``request`` into a native query.

        Args:
            request: The backend-agnostic search.
            from_: Offset of the first hit, left unset when None.
            size: Number of hits, left unset when None.
            min_score: Relevance floor, left unset when None.

        Raises:
            InvalidRequest: If there is neither query text nor a filter.
        """
        text = request.text
        if not text and not request.filters:
            raise InvalidRequest("Search request has an empty query and no filters")

        return NativeQuery(
            must=[self._query_string(text), *self._filters(request)],
            should=self._boosts(request),
            sort=["_score", *self._sorting(request)],
            from_=from_,
            size=size,
            min_score=min_score,
        )

    @staticmethod
    def _query_string(text: str) -> dict[str, Any]:
        return {"query_string": {"query": text or MATCH_ALL_QUERY}}

    @staticmethod
    def _filters(request: SearchRequest) -> list[dict[str, Any]]:
        return [{"match_phrase": {field: value}} for field, value in request.filters.items()]

    @staticmethod
    def _sorting(request: SearchRequest) -> list[dict[str, Any]]:
        return [{spec.field: {"order": spec.direction.value}} for spec in request.sorts]

    @staticmethod
    def _boosts(request: SearchRequest) -> dict[str, Any] | None:
        """Optional multi_match over the boosted fields; omitted when the text is empty, even with boosts set."""
        if not request.boosts or not request.text:
            return None
        fields = [f"{field}^{_format_weight(weight)}" for field, weight in request.boosts.items()]
        return {"multi_match": {"query": request.text, "fields": fields}}


def _format_weight(weight: int | float) -> str:
    """Render a boost weight, dropping the fraction of whole numbers (3.0 -> '3')."""
    if isinstance(weight, float) and weight.is_integer():
        return str(int(weight))
    return str(weight)
