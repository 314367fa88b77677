"""
Dependency Injection for FastAPI.

This module wires one search engine per provider (web search client,
result parser and cache) into the web search service, and exposes it
as a FastAPI dependency.
"""

import threading
from typing import Optional

from src.adapters.search.providers import client_config, result_parser
from src.adapters.search.web_search_client import WebSearchClient
from src.application.services.caching_web_search import CachingWebSearch
from src.application.services.result_cache import ResultCache
from src.application.services.web_search_service import WebSearchService
from src.config.settings import SearchSettings, get_settings
from src.domain.models import SearchProvider


# Thread-safe singleton management (RLock allows same thread to re-acquire)
_lock = threading.RLock()
_web_search_service: Optional[WebSearchService] = None


def create_search_engine(provider: SearchProvider, settings: SearchSettings) -> CachingWebSearch:
    """Build the caching search engine for one provider."""
    return CachingWebSearch(
        document_source=WebSearchClient(client_config(provider, settings)),
        result_parser=result_parser(provider),
        cache=ResultCache(
            expire_after_mins=settings.cache_expire_after_mins,
            max_size=settings.cache_max_size,
        ),
        max_tries=settings.max_tries,
    )


def get_web_search_service() -> WebSearchService:
    """Get the web search service with one engine per provider (thread-safe)."""
    global _web_search_service

    if _web_search_service is not None:
        return _web_search_service

    with _lock:
        # Double-check after acquiring lock
        if _web_search_service is not None:
            return _web_search_service

        settings = get_settings()
        _web_search_service = WebSearchService(
            engines={
                provider: create_search_engine(provider, settings.search)
                for provider in SearchProvider
            }
        )

        return _web_search_service


async def close_dependencies() -> None:
    """Close the HTTP clients held by the search engines (call on shutdown)."""
    global _web_search_service

    with _lock:
        service = _web_search_service
        _web_search_service = None

    if service is not None:
        await service.close()


def reset_dependencies() -> None:
    """Reset all singleton instances."""
    global _web_search_service

    with _lock:
        _web_search_service = None
