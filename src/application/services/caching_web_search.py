"""
Caching Web Search - Acquires a requested number of search results.

This service coordinates:
- Query validation and normalization
- Cache lookups (copy-on-read)
- Fetching result pages and parsing them
- Retrying with a growing page size until enough results are parsable
"""

from typing import List, Optional

from src.application.ports.document_source_port import DocumentSourcePort
from src.application.ports.result_parser_port import ResultParserPort
from src.application.ports.search_port import SearchPort
from src.application.services.result_cache import ResultCache
from src.config.logging import get_logger, search_context
from src.domain.exceptions import (
    DocumentStructureError,
    InvalidParamError,
    SearchError,
    TransportError,
)
from src.domain.models import SearchResultRecord

logger = get_logger(__name__)

DEFAULT_MAX_TRIES = 6

# A page asked for n results rarely holds n parsable ones, because
# providers render some results in a different layout
INITIAL_PADDING = 2
PADDING_STEP = 2


def normalize_query(query: Optional[str]) -> str:
    """Validate a raw query and fold it into its cache key."""
    if query is None or not query.strip():
        raise InvalidParamError("Query must be neither null nor blank", field="query")
    # Web searches are case-insensitive
    return query.lower()


class CachingWebSearch(SearchPort):
    """
    Search engine for a single provider.

    Results are cached per normalized query. Concurrent misses for the
    same query may both fetch; the last writer wins.
    """

    def __init__(
        self,
        document_source: DocumentSourcePort,
        result_parser: ResultParserPort,
        cache: ResultCache,
        max_tries: int = DEFAULT_MAX_TRIES,
    ):
        """
        Initialize the caching web search.

        Args:
            document_source: Source of result pages for the provider
            result_parser: Parser matching the provider's page layout
            cache: Cache owned by this engine
            max_tries: Fetch-and-parse attempts before giving up
        """
        if max_tries < 1:
            raise ValueError("max_tries must be at least 1")
        self._source = document_source
        self._parser = result_parser
        self._cache = cache
        self._max_tries = max_tries

    @property
    def provider(self) -> str:
        return self._parser.provider

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def search(
        self,
        query: str,
        result_count: int,
    ) -> List[SearchResultRecord]:
        """
        Return the first ``result_count`` parsable results for ``query``.

        Cached entries holding enough results are served without any
        network access. Otherwise the provider is queried, the full
        (possibly larger) result list is cached, and exactly
        ``result_count`` copies are returned.
        """
        if result_count is None or result_count < 1:
            raise InvalidParamError("Result count must be greater than 0", field="result_count")
        key = normalize_query(query)

        cached = self._cache.get(key, limit=result_count)
        if cached is not None and len(cached) >= result_count:
            logger.debug(
                "search_cache_hit",
                provider=self.provider,
                query=key,
                result_count=result_count,
            )
            return cached

        with search_context(self.provider, key):
            results = await self._find_results(key, result_count)
        self._cache.put(key, results)

        logger.info(
            "search_complete",
            provider=self.provider,
            query=key,
            result_count=result_count,
            cached_results=len(results),
        )
        return [record.model_copy() for record in results[:result_count]]

    async def _find_results(self, query: str, result_count: int) -> List[SearchResultRecord]:
        """Fetch and parse with a growing target until enough results are found."""
        target = result_count + INITIAL_PADDING
        last_error: Optional[SearchError] = None

        for attempt in range(1, self._max_tries + 1):
            try:
                results = await self._search_and_parse(query, target)
            except (DocumentStructureError, TransportError) as e:
                logger.warning(
                    "search_attempt_failed",
                    provider=self.provider,
                    query=query,
                    attempt=attempt,
                    target=target,
                    error_code=e.code,
                    error=e.message,
                )
                last_error = e
            else:
                if len(results) >= result_count:
                    return results
                last_error = None
                logger.debug(
                    "search_underfilled_retry",
                    provider=self.provider,
                    query=query,
                    attempt=attempt,
                    found=len(results),
                    target=target,
                )
            target += PADDING_STEP

        if last_error is not None:
            raise last_error

        logger.warning(
            "search_failed",
            provider=self.provider,
            query=query,
            result_count=result_count,
            max_tries=self._max_tries,
        )
        raise SearchError(
            message=f"Failed to find {result_count} results for query '{query}'",
            provider=self.provider,
            query=query,
            details={"result_count": result_count, "max_tries": self._max_tries},
        )

    async def _search_and_parse(self, query: str, target: int) -> List[SearchResultRecord]:
        documents = await self._source.fetch(query, target)
        results: List[SearchResultRecord] = []
        for document in documents:
            results.extend(self._parser.parse(document))
        return results

    async def close(self) -> None:
        """Release the document source."""
        await self._source.close()
