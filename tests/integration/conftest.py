"""Integration test fixtures — A running Elasticsearch with seeded posts.

Expects a cluster at localhost:9200, e.g.::

    docker run -d -p 9200:9200 -e discovery.type=single-node \
        -e xpack.security.enabled=false docker.elastic.co/elasticsearch/elasticsearch:8.13.0

Tests are skipped when no cluster answers.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from indexbridge.adapters.elasticsearch.engine import ElasticsearchEngine
from indexbridge.config.settings import ElasticsearchSettings, IndexSettings, Settings
from indexbridge.models.index import IndexDescriptor

HOST = "http://localhost:9200"
INDEX = "indexbridge-test-posts"


@dataclass
class Article:
    id: int
    title: str
    content: str
    author: str
    tags: list[str] = field(default_factory=list)

    def get_key(self) -> int:
        return self.id

    def to_searchable_array(self) -> dict[str, Any]:
        return {"title": self.title, "content": self.content, "author": self.author, "tags": self.tags}

    def searchable_as(self) -> str:
        return INDEX


MOCK_ARTICLES: list[Article] = [
    Article(
        id=1,
        title="Advances in Solar Nowcasting Using Deep Learning",
        content="A convolutional network that predicts solar irradiance from satellite imagery.",
        author="Alice Johnson",
        tags=["solar energy", "deep learning"],
    ),
    Article(
        id=2,
        title="Transformer Models for Natural Language Understanding",
        content="A survey of transformer language models on GLUE and SQuAD benchmarks.",
        author="Bob Smith",
        tags=["NLP", "transformers"],
    ),
    Article(
        id=3,
        title="Solar Panel Degradation in Desert Climates",
        content="Field measurements of photovoltaic output loss under dust and heat.",
        author="Alice Johnson",
        tags=["solar energy"],
    ),
    Article(
        id=4,
        title="Graph Neural Networks for Drug Discovery",
        content="Message passing over molecular graphs for property prediction.",
        author="Eve Brown",
        tags=["graph neural networks"],
    ),
]

MAPPING = {
    "title": {"type": "text"},
    "content": {"type": "text"},
    "author": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
    "tags": {"type": "keyword"},
}


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


class ArticleRepository:
    """In-memory stand-in for the persistence layer."""

    def __init__(self, articles: list[Article]) -> None:
        self._by_key = {str(a.id): a for a in articles}
        self.calls: list[list[str]] = []

    async def find_many(self, keys: list[str]) -> list[Article]:
        self.calls.append(list(keys))
        return [self._by_key[k] for k in keys if k in self._by_key]


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    if not _wait_for_service(HOST):
        pytest.skip(f"Elasticsearch not available at {HOST}")
    return HOST


@pytest.fixture
async def engine(elasticsearch_ready: str):
    # Current clusters are typeless and score BM25 well below the default floor.
    settings = Settings(
        _env_file=None,  # type: ignore[call-arg]
        elasticsearch=ElasticsearchSettings(hosts=[elasticsearch_ready]),
        index=IndexSettings(per_type_index=True, min_score=0, include_type_name=False),
    )
    e = ElasticsearchEngine(settings)
    await e.initialize()

    if await e.exists(INDEX):
        await e.delete_index(INDEX)
    await e.ensure_index(IndexDescriptor(name=INDEX, type_name=INDEX, mapping=MAPPING))
    await e.update(MOCK_ARTICLES)
    await e._client.indices.refresh(index=INDEX)

    yield e

    await e.delete_index(INDEX)
    await e.shutdown()


@pytest.fixture
def article_repository() -> ArticleRepository:
    return ArticleRepository(MOCK_ARTICLES)


@pytest.fixture
def index_name() -> str:
    return INDEX


@pytest.fixture
def articles() -> list[Article]:
    return MOCK_ARTICLES


@pytest.fixture
def make_repository():
    return ArticleRepository
