"""Search adapters package."""

from src.adapters.search.bing_parser import BingResultParser
from src.adapters.search.google_parser import GoogleResultParser
from src.adapters.search.mock_source import MockDocumentSource
from src.adapters.search.web_search_client import WebSearchClient, WebSearchClientConfig

__all__ = [
    "BingResultParser",
    "GoogleResultParser",
    "MockDocumentSource",
    "WebSearchClient",
    "WebSearchClientConfig",
]
