"""Base search engine — Abstract interface for index-backed search engines.

An engine sits between searchable domain records and a full-text backend.
It is responsible for:
  1. Writing records to the index (upsert and delete, batched)
  2. Executing single-page and paginated searches
  3. Reconciling hits with stored records, in relevance order
  4. Reporting health status

The engine never loads records itself; a ``RecordRepository`` supplied by
the caller does the batched fetch-by-key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from indexbridge.models.request import SearchRequest
from indexbridge.models.result import RawSearchResult, ReconciledResult


@runtime_checkable
class Searchable(Protocol):
    """A domain record that can be written to a search index."""

    def get_key(self) -> Any:
        """Primary key; becomes the document id."""
        ...

    def to_searchable_array(self) -> dict[str, Any]:
        """Document body stored in the index."""
        ...

    def searchable_as(self) -> str:
        """Type name, also the index name in per-type mode."""
        ...


class RecordRepository(Protocol):
    """Persistence collaborator that loads records by primary key."""

    async def find_many(self, keys: Sequence[str]) -> Iterable[Searchable]:
        """Fetch every stored record whose key is in ``keys``, in one call.

        Missing keys are simply absent from the result; order does not matter.
        """
        ...


class EngineHealth(BaseModel):
    """Health status of a search engine."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchEngine(ABC):
    """Abstract base class for search engines.

    All engines must implement:
      - update() / delete(): Batched index writes
      - search() / paginate(): Execute a query and return raw results
      - map_ids() / map(): Turn raw results into ids or stored records
      - get_total_count(): Total matches of a raw result
      - health_check(): Report engine health status

    Engines hold only read-only configuration after construction and may
    be shared between concurrent callers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique engine name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the backend connection. Called once at startup."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the backend connection and release resources."""

    @abstractmethod
    async def update(self, records: Sequence[Searchable]) -> Any:
        """Upsert the given records into their indices."""

    @abstractmethod
    async def delete(self, records: Sequence[Searchable]) -> Any:
        """Remove the given records from their indices."""

    @abstractmethod
    async def search(self, request: SearchRequest) -> RawSearchResult:
        """Execute a single-page search.

        Args:
            request: The search to run.

        Returns:
            Raw results from the backend.
        """

    @abstractmethod
    async def paginate(self, request: SearchRequest, per_page: int, page: int) -> RawSearchResult:
        """Execute a search for one page of results.

        Args:
            request: The search to run.
            per_page: Page size, must be positive.
            page: 1-based page number.

        Returns:
            Raw results with ``page_count`` populated.
        """

    @abstractmethod
    def map_ids(self, results: RawSearchResult) -> list[str]:
        """Hit ids of ``results`` in relevance order."""

    @abstractmethod
    async def map(self, results: RawSearchResult, repository: RecordRepository) -> ReconciledResult:
        """Resolve hits to stored records, preserving relevance order."""

    @abstractmethod
    def get_total_count(self, results: RawSearchResult) -> int:
        """Total number of matches reported by the backend."""

    @abstractmethod
    async def health_check(self) -> EngineHealth:
        """Check the health of the search backend."""

    async def get(self, request: SearchRequest, repository: RecordRepository) -> ReconciledResult:
        """Search and reconcile in one step.

        Runs a paginated search when the request carries ``page`` and
        ``per_page``, a single-page search otherwise.
        """
        if request.page is not None and request.per_page is not None:
            raw = await self.paginate(request, request.per_page, request.page)
        else:
            raw = await self.search(request)
        return await self.map(raw, repository)
