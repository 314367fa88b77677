"""
Web Search Service - Runs web searches against the supported providers.
"""

from typing import Dict, List, Optional, Union

from src.application.ports.search_port import SearchPort
from src.config.logging import get_logger
from src.domain.exceptions import InvalidParamError
from src.domain.models import SearchProvider, SearchResultRecord

logger = get_logger(__name__)


class WebSearchService:
    """Dispatches search requests to the engine of the requested provider."""

    def __init__(self, engines: Dict[SearchProvider, SearchPort]):
        """
        Initialize the web search service.

        Args:
            engines: Search engine per supported provider
        """
        self._engines = dict(engines)

    @property
    def providers(self) -> List[SearchProvider]:
        return list(self._engines)

    def engine_for(self, provider: Optional[Union[str, SearchProvider]]) -> SearchPort:
        """
        Resolve a provider identifier to its search engine.

        Raises:
            InvalidParamError: If the identifier is missing or unsupported
        """
        if provider is None:
            raise InvalidParamError("Search provider must not be null", field="provider")
        search_provider = SearchProvider.find(provider)
        if search_provider is None or search_provider not in self._engines:
            raise InvalidParamError(f"Unsupported search provider: {provider}", field="provider")
        return self._engines[search_provider]

    async def search(
        self,
        query: str,
        result_count: int,
        provider: Optional[Union[str, SearchProvider]],
    ) -> List[SearchResultRecord]:
        """
        Run a web search and return the parsed results.

        Args:
            query: The query string, case-insensitive
            result_count: Number of results to return
            provider: Provider identifier, e.g. "google" or "BING"

        Returns:
            The found results

        Raises:
            InvalidParamError: If a parameter is invalid or the provider is unsupported
            SearchError: If the search or the processing of its results fails
        """
        engine = self.engine_for(provider)
        logger.debug(
            "web_search_dispatch",
            provider=getattr(provider, "value", provider),
            result_count=result_count,
        )
        return await engine.search(query, result_count)

    async def close(self) -> None:
        """Close every engine that owns closable resources."""
        for engine in self._engines.values():
            close = getattr(engine, "close", None)
            if close is not None:
                await close()
