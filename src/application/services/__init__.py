"""
Application Services.

This module contains application-level services that coordinate
between domain models and infrastructure adapters.
"""

from src.application.services.caching_web_search import CachingWebSearch
from src.application.services.result_cache import ResultCache
from src.application.services.web_search_service import WebSearchService

__all__ = ["CachingWebSearch", "ResultCache", "WebSearchService"]
