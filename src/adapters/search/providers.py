"""
Provider definitions - endpoint, pagination and parser per search provider.
"""

from typing import Any, Dict, Type

from src.adapters.search.bing_parser import BingResultParser
from src.adapters.search.google_parser import GoogleResultParser
from src.adapters.search.web_search_client import WebSearchClientConfig
from src.application.ports.result_parser_port import ResultParserPort
from src.config.settings import SearchSettings
from src.domain.models import SearchProvider


PROVIDER_ENDPOINTS: Dict[SearchProvider, Dict[str, Any]] = {
    SearchProvider.GOOGLE: {
        "search_url": "https://www.google.com/search",
        "query_param": "q",
        "result_count_param": "num",
        "offset_param": "start",
        "max_results_per_page": 100,
        "offset_base": 0,
    },
    SearchProvider.BING: {
        "search_url": "https://www.bing.com/search",
        "query_param": "q",
        "result_count_param": "count",
        "offset_param": "first",
        "max_results_per_page": 50,
        "offset_base": 1,
    },
}

PROVIDER_PARSERS: Dict[SearchProvider, Type[ResultParserPort]] = {
    SearchProvider.GOOGLE: GoogleResultParser,
    SearchProvider.BING: BingResultParser,
}


def client_config(provider: SearchProvider, settings: SearchSettings) -> WebSearchClientConfig:
    """Build the web search client configuration for a provider."""
    return WebSearchClientConfig(
        **PROVIDER_ENDPOINTS[provider],
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
    )


def result_parser(provider: SearchProvider) -> ResultParserPort:
    """Create the result parser for a provider."""
    return PROVIDER_PARSERS[provider]()
