"""Search request models — Backend-agnostic description of a search."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class SortDirection(StrEnum):
    """Sort order of a secondary sort key."""

    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """One caller-supplied sort key, applied after relevance."""

    model_config = {"frozen": True}

    field: str = Field(description="Document field to sort on")
    direction: SortDirection = Field(default=SortDirection.ASC, description="Sort direction")


class SearchRequest(BaseModel):
    """A structured search against one searchable type.

    Filters, sorts and boosts keep the caller's insertion order, which
    makes the rendered query deterministic. The request is frozen; the
    ``where``/``order_by``/``take``/``boost`` helpers return new requests.

    Example:
        >>> request = (
        ...     SearchRequest(index_type="posts", query="solar")
        ...     .where("status", "published")
        ...     .order_by("created_at", "desc")
        ...     .boost("title", 3)
        ... )
    """

    model_config = {"frozen": True}

    index_type: str = Field(description="Searchable type name, also the per-type index name")
    query: str = Field(default="", description="Free-text query in query_string syntax")
    filters: dict[str, Any] = Field(default_factory=dict, description="Exact phrase filters, field -> value")
    sorts: list[SortSpec] = Field(default_factory=list, description="Secondary sort keys in priority order")
    limit: int | None = Field(default=None, ge=1, description="Maximum hits for a single-page search")
    page: int | None = Field(default=None, description="1-based page number for paginated searches")
    per_page: int | None = Field(default=None, description="Page size for paginated searches")
    boosts: dict[str, int | float] = Field(default_factory=dict, description="Per-field relevance weights")

    def where(self, field: str, value: Any) -> SearchRequest:
        """Return a copy with an additional equality filter."""
        return self.model_copy(update={"filters": {**self.filters, field: value}})

    def order_by(self, field: str, direction: SortDirection | str = SortDirection.ASC) -> SearchRequest:
        """Return a copy with an additional sort key."""
        spec = SortSpec(field=field, direction=SortDirection(direction))
        return self.model_copy(update={"sorts": [*self.sorts, spec]})

    def take(self, limit: int) -> SearchRequest:
        """Return a copy limited to ``limit`` hits."""
        return self.model_validate({**self.model_dump(), "limit": limit})

    def boost(self, field: str, weight: int | float) -> SearchRequest:
        """Return a copy with ``field`` weighted by ``weight``."""
        return self.model_copy(update={"boosts": {**self.boosts, field: weight}})

    def for_page(self, page: int, per_page: int) -> SearchRequest:
        """Return a copy carrying pagination parameters."""
        return self.model_copy(update={"page": page, "per_page": per_page})

    @property
    def text(self) -> str:
        """The free-text query with surrounding whitespace removed."""
        return self.query.strip()
