"""Search result models — Raw engine hits and reconciled records."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field


class Hit(BaseModel):
    """One matched document as returned by the engine."""

    id: str = Field(description="External document id (the record's primary key)")
    score: float | None = Field(default=None, description="Relevance score")
    index: str | None = Field(default=None, description="Index the hit came from")
    source: dict[str, Any] = Field(default_factory=dict, description="Stored document body, if returned")


class RawSearchResult(BaseModel):
    """Engine response reduced to ordered hits and a scalar total."""

    hits: list[Hit] = Field(default_factory=list, description="Hits in relevance order")
    total: int = Field(default=0, ge=0, description="Total number of matching documents")
    page_count: int | None = Field(default=None, description="Number of pages, set by paginated searches")
    took_ms: int = Field(default=0, description="Backend query execution time in ms")

    @classmethod
    def from_response(cls, response: Any) -> RawSearchResult:
        """Build a result from an Elasticsearch search response.

        ``hits.total`` is reported as a plain integer by older clusters and
        as ``{"value": n, "relation": ...}`` by current ones; both collapse
        to one integer here.
        """
        data = getattr(response, "body", response) or {}
        hits = data.get("hits", {})

        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return cls(
            hits=[
                Hit(
                    id=str(raw["_id"]),
                    score=raw.get("_score"),
                    index=raw.get("_index"),
                    source=raw.get("_source") or {},
                )
                for raw in hits.get("hits", [])
            ],
            total=int(total or 0),
            took_ms=int(data.get("took", 0)),
        )

    @property
    def ids(self) -> list[str]:
        """Hit ids in relevance order."""
        return [hit.id for hit in self.hits]


class ReconciledResult(BaseModel):
    """Stored records matching the surviving hits, in hit order."""

    records: list[Any] = Field(default_factory=list, description="Domain records in relevance order")
    total: int = Field(default=0, description="Total number of matching documents")
    page_count: int | None = Field(default=None, description="Number of pages for paginated searches")
    missing_ids: list[str] = Field(
        default_factory=list,
        description="Hit ids with no stored record; dropped from records",
    )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Any]:  # type: ignore[override]
        return iter(self.records)
