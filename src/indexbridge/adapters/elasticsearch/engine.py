"""Elasticsearch engine — Searchable records indexed and queried in Elasticsearch.

Wires the index resolver, query translator, bulk builder, search executor,
result mapper and index manager around one ``AsyncElasticsearch`` client.

Usage::

    engine = ElasticsearchEngine(Settings())
    await engine.initialize()
    await engine.update(posts)
    result = await engine.get(
        SearchRequest(index_type="posts", query="solar").where("status", "published"),
        PostRepository(session),
    )
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from indexbridge.adapters.base.adapter import EngineHealth, RecordRepository, Searchable, SearchEngine
from indexbridge.adapters.base.exceptions import BackendUnavailable, ConfigurationError
from indexbridge.adapters.elasticsearch.bulk import BulkBatchBuilder
from indexbridge.adapters.elasticsearch.executor import SearchExecutor
from indexbridge.adapters.elasticsearch.indices import IndexManager
from indexbridge.adapters.elasticsearch.mapper import ResultMapper
from indexbridge.adapters.elasticsearch.resolver import IndexResolver, resolver_from_settings
from indexbridge.adapters.elasticsearch.responses import response_body, transport_cause
from indexbridge.adapters.elasticsearch.translator import QueryTranslator
from indexbridge.config.settings import Settings
from indexbridge.models.bulk import BulkBatch
from indexbridge.models.index import IndexDescriptor
from indexbridge.models.request import SearchRequest
from indexbridge.models.result import RawSearchResult, ReconciledResult

logger = logging.getLogger(__name__)


class ElasticsearchEngine(SearchEngine):
    """Search engine backed by Elasticsearch.

    Supports:
      - Batched upserts and deletes through the bulk API
      - query_string search with phrase filters, secondary sorts and boosts
      - Pagination with page counts
      - Order-preserving reconciliation of hits with stored records
      - Index creation, deletion and mappings

    Args:
        settings: Application settings; defaults are used when None.
        client: A ready client to use instead of building one in ``initialize()``.
    """

    def __init__(self, settings: Settings | None = None, client: Any = None) -> None:
        self._settings = settings or Settings()
        self._resolver = resolver_from_settings(self._settings.index)
        self._translator = QueryTranslator()
        self._bulk = BulkBatchBuilder(include_type_name=self._settings.index.include_type_name)
        self._mapper = ResultMapper()
        self._client: Any = None
        self._executor: SearchExecutor | None = None
        self._indices: IndexManager | None = None
        if client is not None:
            self._bind(client)

    @property
    def name(self) -> str:
        return "elasticsearch"

    @property
    def resolver(self) -> IndexResolver:
        return self._resolver

    def _bind(self, client: Any) -> None:
        self._client = client
        self._executor = SearchExecutor(
            client,
            self._resolver,
            translator=self._translator,
            min_score=self._settings.index.min_score,
        )
        self._indices = IndexManager(client, include_type_name=self._settings.index.include_type_name)

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client and verify the connection."""
        es = self._settings.elasticsearch
        if not es.hosts:
            raise ConfigurationError("No Elasticsearch hosts configured.")

        client_kwargs: dict[str, Any] = {
            "hosts": es.hosts,
            "request_timeout": es.request_timeout,
        }
        if not es.verify_certs:
            client_kwargs["verify_certs"] = False
        if es.api_key:
            client_kwargs["api_key"] = es.api_key
        elif es.username and es.password:
            client_kwargs["basic_auth"] = (es.username, es.password)

        try:
            client = AsyncElasticsearch(**client_kwargs)
        except ValueError as e:
            # Raised for an unusable host list or a missing async HTTP transport (aiohttp).
            raise ConfigurationError(
                f"Cannot build the Elasticsearch client: {e}. Install with: pip install 'elasticsearch[async]'"
            ) from e

        try:
            info = response_body(await client.info())
        except TransportError as e:
            await client.close()
            raise BackendUnavailable(f"Failed to connect to Elasticsearch: {transport_cause(e)}") from e
        except ApiError:
            await client.close()
            raise

        version = info.get("version", {}).get("number", "unknown")
        cluster = info.get("cluster_name", "unknown")
        logger.info("Connected to Elasticsearch cluster: %s (v%s)", cluster, version)
        self._bind(client)

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._executor = None
            self._indices = None

    def _require_executor(self) -> SearchExecutor:
        if self._executor is None:
            raise BackendUnavailable("Elasticsearch client not initialized.")
        return self._executor

    def _require_indices(self) -> IndexManager:
        if self._indices is None:
            raise BackendUnavailable("Elasticsearch client not initialized.")
        return self._indices

    # ── Writes ───────────────────────────────────────────────────────────

    async def update(self, records: Sequence[Searchable]) -> dict[str, Any] | None:
        """Upsert ``records``; each document is inserted if absent."""
        return await self._send(self._bulk.build(self._bulk.upserts(records, self._resolver)))

    async def delete(self, records: Sequence[Searchable]) -> dict[str, Any] | None:
        """Remove ``records`` from their indices."""
        return await self._send(self._bulk.build(self._bulk.deletes(records, self._resolver)))

    async def _send(self, batch: BulkBatch) -> dict[str, Any] | None:
        if batch.is_empty:
            return None
        if self._client is None:
            raise BackendUnavailable("Elasticsearch client not initialized.")

        logger.debug("Elasticsearch bulk: %d operations, %d lines", batch.operation_count, len(batch))
        try:
            response = await self._client.bulk(operations=list(batch.lines))
        except TransportError as e:
            raise BackendUnavailable(f"Elasticsearch bulk request failed: {transport_cause(e)}") from e

        body = response_body(response)
        if body.get("errors"):
            failed = [
                item
                for entry in body.get("items", [])
                for item in entry.values()
                if item.get("error")
            ]
            logger.warning("Bulk request completed with %d failed operations: %s", len(failed), failed[:5])
        return body

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, request: SearchRequest) -> RawSearchResult:
        return await self._require_executor().search(request)

    async def paginate(self, request: SearchRequest, per_page: int, page: int) -> RawSearchResult:
        return await self._require_executor().paginate(request, per_page, page)

    def map_ids(self, results: RawSearchResult) -> list[str]:
        return self._mapper.map_ids(results)

    async def map(self, results: RawSearchResult, repository: RecordRepository) -> ReconciledResult:
        return await self._mapper.map(results, repository)

    def get_total_count(self, results: RawSearchResult) -> int:
        return self._mapper.get_total_count(results)

    # ── Index administration ─────────────────────────────────────────────

    async def exists(self, index: str) -> bool:
        return await self._require_indices().exists(index)

    async def create_index(self, index: str) -> dict[str, Any]:
        return await self._require_indices().create(index)

    async def delete_index(self, index: str) -> dict[str, Any]:
        return await self._require_indices().delete(index)

    async def put_mapping(self, index: str, type_name: str, mapping: dict[str, dict[str, Any]]) -> dict[str, Any]:
        return await self._require_indices().put_mapping(index, type_name, mapping)

    async def ensure_index(self, descriptor: IndexDescriptor) -> bool:
        return await self._require_indices().ensure(descriptor)

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> EngineHealth:
        """Check Elasticsearch cluster health."""
        if not self._client:
            return EngineHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = response_body(await self._client.cluster.health())
            latency_ms = int((time.monotonic() - start) * 1000)
        except Exception as e:
            return EngineHealth(status="unhealthy", message=str(e))

        status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}
        return EngineHealth(
            status=status_map.get(health.get("status", "red"), "unhealthy"),
            latency_ms=latency_ms,
            last_check=datetime.now(UTC).isoformat(),
            message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
        )
