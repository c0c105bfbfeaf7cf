"""Shared test fixtures and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from indexbridge.config.settings import IndexSettings, Settings
from indexbridge.models.request import SearchRequest


@dataclass
class Post:
    """Minimal searchable record used across the tests."""

    id: int
    title: str
    body: str = ""
    status: str = "published"
    tags: list[str] = field(default_factory=list)

    def get_key(self) -> int:
        return self.id

    def to_searchable_array(self) -> dict[str, Any]:
        return {"title": self.title, "body": self.body, "status": self.status, "tags": self.tags}

    def searchable_as(self) -> str:
        return "posts"


def es_response(ids: list[str], total: Any = None, took: int = 3) -> dict[str, Any]:
    """Build an Elasticsearch search response with hits in the given order."""
    return {
        "took": took,
        "hits": {
            "total": {"value": len(ids) if total is None else total, "relation": "eq"},
            "hits": [
                {"_index": "posts", "_id": hit_id, "_score": 90.0 - i, "_source": {}}
                for i, hit_id in enumerate(ids)
            ],
        },
    }


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        index=IndexSettings(name="catalog", per_type_index=True, min_score=50),
    )


@pytest.fixture
def posts() -> list[Post]:
    return [
        Post(id=1, title="Advances in Solar Nowcasting", body="Deep learning for irradiance."),
        Post(id=2, title="Transformer Models", body="Survey of language models.", tags=["nlp"]),
        Post(id=3, title="Federated Medical Imaging", status="draft"),
    ]


@pytest.fixture
def repository(posts: list[Post]) -> MagicMock:
    """Record repository returning stored posts in key order, whatever the request order."""
    by_key = {str(p.id): p for p in posts}

    def find_many(keys: list[str]) -> list[Post]:
        return sorted((by_key[k] for k in keys if k in by_key), key=lambda p: p.id)

    repo = MagicMock()
    repo.find_many = AsyncMock(side_effect=find_many)
    return repo


@pytest.fixture
def es_client() -> MagicMock:
    """Mock ``AsyncElasticsearch`` client."""
    client = MagicMock()
    client.search = AsyncMock(return_value=es_response([]))
    client.bulk = AsyncMock(return_value={"took": 2, "errors": False, "items": []})
    client.info = AsyncMock(return_value={"cluster_name": "test-cluster", "version": {"number": "8.13.0"}})
    client.close = AsyncMock()
    client.indices = MagicMock()
    client.indices.exists = AsyncMock(return_value=True)
    client.indices.create = AsyncMock(return_value={"acknowledged": True, "index": "posts"})
    client.indices.delete = AsyncMock(return_value={"acknowledged": True})
    client.indices.put_mapping = AsyncMock(return_value={"acknowledged": True})
    client.cluster = MagicMock()
    client.cluster.health = AsyncMock(
        return_value={"status": "green", "cluster_name": "test-cluster", "number_of_nodes": 3}
    )
    return client


@pytest.fixture
def simple_request() -> SearchRequest:
    return SearchRequest(index_type="posts", query="solar nowcasting")


@pytest.fixture
def make_response():
    """Factory for Elasticsearch search responses."""
    return es_response
