"""
Unit tests for the caching web search engine.
"""

import asyncio

import pytest
import structlog

from src.adapters.search.mock_source import MockDocumentSource
from src.application.services.caching_web_search import CachingWebSearch, normalize_query
from src.application.services.result_cache import ResultCache
from src.domain.exceptions import (
    DocumentStructureError,
    InvalidParamError,
    SearchError,
    TransportError,
)
from tests.html_pages import EMPTY_PAGE, bing_page, google_page


def make_engine(source, parser, max_tries=6):
    return CachingWebSearch(
        document_source=source,
        result_parser=parser,
        cache=ResultCache(expire_after_mins=60, max_size=100),
        max_tries=max_tries,
    )


class TestNormalizeQuery:
    """Tests for query normalization."""

    def test_lowercases(self):
        assert normalize_query("Python ASYNCIO") == "python asyncio"

    @pytest.mark.parametrize("query", [None, "", "   ", "\t\n"])
    def test_rejects_blank(self, query):
        with pytest.raises(InvalidParamError):
            normalize_query(query)


class TestCachingWebSearch:
    """Tests for CachingWebSearch."""

    @pytest.mark.asyncio
    async def test_returns_requested_count(self, google_search, google_source):
        """Test that exactly the requested number of results is returned."""
        results = await google_search.search("python", 5)

        assert len(results) == 5
        assert [r.title for r in results] == [f"Result {i}" for i in range(5)]
        assert google_source.get_call_count() == 1

    @pytest.mark.asyncio
    async def test_initial_target_is_padded(self, google_search, google_source):
        """Test that the first fetch asks for two more results than requested."""
        await google_search.search("python", 10)

        assert google_source.get_targets() == [12]

    @pytest.mark.asyncio
    async def test_query_is_case_folded(self, google_search, google_source):
        """Test that queries differing only in case share one cache entry."""
        first = await google_search.search("Python Tutorial", 3)
        second = await google_search.search("PYTHON tutorial", 3)

        assert first == second
        assert google_source.get_call_count() == 1
        assert google_source.get_queries() == ["python tutorial"]

    @pytest.mark.asyncio
    async def test_cache_hit_skips_fetch(self, google_search, google_source):
        """Test that a cached entry serves same or smaller counts without fetching."""
        await google_search.search("python", 5)
        google_source.reset()

        same = await google_search.search("python", 5)
        smaller = await google_search.search("python", 2)

        assert len(same) == 5
        assert len(smaller) == 2
        assert google_source.get_call_count() == 0

    @pytest.mark.asyncio
    async def test_oversized_cache_entry_serves_larger_request(self, google_search, google_source):
        """Test that padding results kept in the cache satisfy a later larger request."""
        await google_search.search("python", 5)  # fetches and caches 7 results
        google_source.reset()

        results = await google_search.search("python", 7)

        assert len(results) == 7
        assert google_source.get_call_count() == 0

    @pytest.mark.asyncio
    async def test_insufficient_cache_entry_refetches(self, google_search, google_source, result_cache):
        """Test that a cached entry with too few results causes a new fetch."""
        await google_search.search("python", 5)
        google_source.reset()

        results = await google_search.search("python", 8)

        assert len(results) == 8
        assert google_source.get_targets() == [10]
        assert len(result_cache.get("python")) == 10

    @pytest.mark.asyncio
    async def test_results_are_fresh_copies(self, google_search, result_cache):
        """Test that callers never share record objects with the cache or each other."""
        first = await google_search.search("python", 3)
        second = await google_search.search("python", 3)
        cached = result_cache.get("python")

        assert first == second == cached[:3]
        assert first is not second
        assert all(a is not b for a, b in zip(first, second))

    @pytest.mark.asyncio
    async def test_caller_mutation_does_not_affect_cache(self, google_search, result_cache):
        """Test that repeated calls never change the cached entry."""
        results = await google_search.search("python", 4)
        before = result_cache.get("python")

        results.clear()
        results = await google_search.search("python", 4)
        results.reverse()

        assert result_cache.get("python") == before
        assert len(await google_search.search("python", 4)) == 4

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, -1, -100])
    async def test_rejects_non_positive_count(self, google_search, google_source, count):
        """Test that invalid counts fail before any fetch."""
        with pytest.raises(InvalidParamError) as exc_info:
            await google_search.search("python", count)

        assert exc_info.value.field == "result_count"
        assert google_source.get_call_count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", None])
    async def test_rejects_blank_query(self, google_search, google_source, query):
        """Test that blank queries fail before any fetch."""
        with pytest.raises(InvalidParamError) as exc_info:
            await google_search.search(query, 3)

        assert exc_info.value.field == "query"
        assert google_source.get_call_count() == 0

    @pytest.mark.asyncio
    async def test_retries_with_growing_target(self, google_parser):
        """Test that underfilled pages trigger retries with a target grown by two."""
        source = MockDocumentSource(lambda query, min_results: [google_page(min_results - 3)])
        engine = make_engine(source, google_parser)

        results = await engine.search("python", 5)

        assert len(results) == 5
        assert source.get_targets() == [7, 9]
        assert len(engine.cache.get("python")) == 6

    @pytest.mark.asyncio
    async def test_fails_when_budget_exhausted(self, google_parser):
        """Test that a provider always one short exhausts the budget and caches nothing."""
        requested = 10
        source = MockDocumentSource(lambda query, min_results: [google_page(requested - 1)])
        engine = make_engine(source, google_parser)

        with pytest.raises(SearchError) as exc_info:
            await engine.search("python", requested)

        error = exc_info.value
        assert type(error) is SearchError
        assert "Failed to find 10 results for query 'python'" in error.message
        assert source.get_targets() == [12, 14, 16, 18, 20, 22]
        assert len(engine.cache) == 0

    @pytest.mark.asyncio
    async def test_custom_try_budget(self, google_parser):
        """Test that the configured try budget bounds the number of fetches."""
        source = MockDocumentSource([google_page(1)])
        engine = make_engine(source, google_parser, max_tries=2)

        with pytest.raises(SearchError):
            await engine.search("python", 5)

        assert source.get_call_count() == 2

    def test_rejects_invalid_try_budget(self, google_source, google_parser, result_cache):
        """Test that the try budget must be at least one."""
        with pytest.raises(ValueError):
            CachingWebSearch(google_source, google_parser, result_cache, max_tries=0)

    @pytest.mark.asyncio
    async def test_concatenates_documents_in_order(self, bing_parser):
        """Test that results of multiple pages are concatenated positionally."""
        source = MockDocumentSource([bing_page(3, start=0), bing_page(3, start=3)])
        engine = make_engine(source, bing_parser)

        results = await engine.search("python", 4)

        assert [r.title for r in results] == [f"Result {i}" for i in range(4)]
        assert len(engine.cache.get("python")) == 6

    @pytest.mark.asyncio
    async def test_structure_error_is_retried_then_raised(self, google_parser):
        """Test that persistent layout drift surfaces as DocumentStructureError."""
        source = MockDocumentSource([EMPTY_PAGE])
        engine = make_engine(source, google_parser, max_tries=3)

        with pytest.raises(DocumentStructureError):
            await engine.search("python", 5)

        assert source.get_call_count() == 3

    @pytest.mark.asyncio
    async def test_transport_error_surfaces_distinctly(self, google_parser):
        """Test that persistent transport failures surface as TransportError."""
        def failing(query, min_results):
            raise TransportError("HTTP 500", query=query, status_code=500)

        source = MockDocumentSource(failing)
        engine = make_engine(source, google_parser)

        with pytest.raises(TransportError) as exc_info:
            await engine.search("python", 5)

        assert not isinstance(exc_info.value, DocumentStructureError)
        assert exc_info.value.status_code == 500
        assert source.get_call_count() == 6
        assert len(engine.cache) == 0

    @pytest.mark.asyncio
    async def test_recovers_from_transient_failure(self, google_parser):
        """Test that a failed try is followed by a larger-target retry."""
        def flaky(query, min_results):
            if min_results == 7:
                raise TransportError("connection reset", query=query)
            return [google_page(min_results)]

        source = MockDocumentSource(flaky)
        engine = make_engine(source, google_parser)

        results = await engine.search("python", 5)

        assert len(results) == 5
        assert source.get_targets() == [7, 9]

    @pytest.mark.asyncio
    async def test_underfilled_after_failure_raises_search_error(self, google_parser):
        """Test that the final outcome decides the error kind."""
        def degrading(query, min_results):
            if min_results == 7:
                raise TransportError("timeout", query=query)
            return [google_page(1)]

        source = MockDocumentSource(degrading)
        engine = make_engine(source, google_parser, max_tries=2)

        with pytest.raises(SearchError) as exc_info:
            await engine.search("python", 5)

        assert type(exc_info.value) is SearchError

    @pytest.mark.asyncio
    async def test_unexpected_parse_error_is_terminal(self, google_parser, monkeypatch):
        """Test that item mapping failures are not retried."""
        def broken(item):
            raise KeyError("href")

        monkeypatch.setattr(google_parser, "_parse_result", broken)
        source = MockDocumentSource([google_page(10)])
        engine = make_engine(source, google_parser)

        with pytest.raises(SearchError):
            await engine.search("python", 5)

        assert source.get_call_count() == 1

    @pytest.mark.asyncio
    async def test_concurrent_calls_for_same_query(self, google_search, google_source):
        """Test that concurrent misses for one query both succeed."""
        first, second = await asyncio.gather(
            google_search.search("python", 3),
            google_search.search("Python", 3),
        )

        assert first == second
        assert 1 <= google_source.get_call_count() <= 2

    @pytest.mark.asyncio
    async def test_close_closes_source(self, google_search, google_source):
        """Test that closing the engine releases its source."""
        await google_search.close()

        assert google_source.closed is True

    @pytest.mark.asyncio
    async def test_binds_search_context_while_fetching(self, google_parser):
        """Test that provider and query are bound to the log context during a fetch."""
        seen = []

        def recording(query, min_results):
            seen.append(structlog.contextvars.get_contextvars())
            return [google_page(min_results)]

        engine = make_engine(MockDocumentSource(recording), google_parser)

        await engine.search("Python", 3)

        assert seen[0]["search_provider"] == "google"
        assert seen[0]["search_query"] == "python"
        assert "search_query" not in structlog.contextvars.get_contextvars()
