"""Native query model — The engine-specific search document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class NativeQuery(BaseModel):
    """An Elasticsearch search body, built fresh for every call.

    ``from``, ``size`` and ``min_score`` stay off the wire unless set, so
    the backend applies its own defaults.
    """

    must: list[dict[str, Any]] = Field(default_factory=list, description="Mandatory bool clauses")
    should: dict[str, Any] | None = Field(default=None, description="Optional score-only bool clause")
    sort: list[str | dict[str, Any]] = Field(default_factory=lambda: ["_score"], description="Sort entries")
    track_scores: bool = Field(default=True, description="Compute scores even when sorting on fields")
    from_: int | None = Field(default=None, ge=0, description="Offset of the first hit")
    size: int | None = Field(default=None, ge=0, description="Number of hits to return")
    min_score: float | None = Field(default=None, description="Relevance floor")

    def to_body(self) -> dict[str, Any]:
        """Render the request body sent to the search endpoint."""
        bool_query: dict[str, Any] = {"must": list(self.must)}
        if self.should is not None:
            bool_query["should"] = self.should

        body: dict[str, Any] = {
            "query": {"bool": bool_query},
            "sort": list(self.sort),
            "track_scores": self.track_scores,
        }
        if self.from_ is not None:
            body["from"] = self.from_
        if self.size is not None:
            body["size"] = self.size
        if self.min_score is not None:
            body["min_score"] = self.min_score
        return body
