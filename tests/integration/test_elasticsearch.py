"""Integration tests for ElasticsearchEngine against a real Elasticsearch instance."""

from __future__ import annotations

import pytest

from indexbridge.adapters.base.exceptions import IndexAdminError
from indexbridge.models.request import SearchRequest

pytestmark = [pytest.mark.integration, pytest.mark.elasticsearch]


class TestElasticsearchHealth:
    async def test_health_check_returns_healthy(self, engine):
        health = await engine.health_check()
        assert health.status in ("healthy", "degraded")
        assert health.latency_ms >= 0


class TestElasticsearchSearch:
    async def test_search_returns_results(self, engine, index_name):
        raw = await engine.search(SearchRequest(index_type=index_name, query="solar"))
        assert raw.total == 2
        assert set(engine.map_ids(raw)) == {"1", "3"}

    async def test_filter_narrows_results(self, engine, index_name):
        request = SearchRequest(index_type=index_name, query="solar").where("title", "Panel Degradation")
        raw = await engine.search(request)
        assert engine.map_ids(raw) == ["3"]

    async def test_no_results_for_gibberish(self, engine, article_repository, index_name):
        result = await engine.get(SearchRequest(index_type=index_name, query="xyzzyspoon999"), article_repository)
        assert result.total == 0
        assert article_repository.calls == []

    async def test_boost_keeps_matches_optional(self, engine, index_name):
        request = SearchRequest(index_type=index_name, query="solar OR transformer").boost("content", 10)
        raw = await engine.search(request)
        assert raw.total == 3

    async def test_limit(self, engine, index_name):
        raw = await engine.search(SearchRequest(index_type=index_name, query="*").take(2))
        assert len(raw.hits) == 2


class TestElasticsearchPagination:
    async def test_paginate_pages(self, engine, index_name):
        request = SearchRequest(index_type=index_name, query="*").order_by("tags")
        first = await engine.paginate(request, per_page=3, page=1)
        second = await engine.paginate(request, per_page=3, page=2)
        assert first.page_count == 2
        assert len(first.hits) == 3
        assert len(second.hits) == 1
        assert not set(first.ids) & set(second.ids)


class TestElasticsearchReconciliation:
    async def test_get_returns_records_in_hit_order(self, engine, article_repository, index_name):
        request = SearchRequest(index_type=index_name, query="solar")
        raw = await engine.search(request)
        result = await engine.map(raw, article_repository)
        assert [str(a.id) for a in result.records] == raw.ids
        assert len(article_repository.calls) == 1

    async def test_records_missing_from_storage_dropped(self, engine, articles, make_repository, index_name):
        repository = make_repository(articles[1:])
        result = await engine.get(SearchRequest(index_type=index_name, query="solar"), repository)
        assert [a.id for a in result.records] == [3]


class TestElasticsearchIndices:
    async def test_exists(self, engine, index_name):
        assert await engine.exists(index_name) is True
        assert await engine.exists("indexbridge-no-such-index") is False

    async def test_create_existing_index_fails(self, engine, index_name):
        with pytest.raises(IndexAdminError) as exc_info:
            await engine.create_index(index_name)
        assert exc_info.value.status == 400
