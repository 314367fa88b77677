"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from src.adapters.api.dependencies import reset_dependencies
from src.adapters.search.bing_parser import BingResultParser
from src.adapters.search.google_parser import GoogleResultParser
from src.adapters.search.mock_source import MockDocumentSource
from src.application.services.caching_web_search import CachingWebSearch
from src.application.services.result_cache import ResultCache
from tests.html_pages import google_page


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset dependency singletons before each test."""
    reset_dependencies()
    yield
    reset_dependencies()


@pytest.fixture
def google_parser():
    """Provide a Google result parser."""
    return GoogleResultParser()


@pytest.fixture
def bing_parser():
    """Provide a Bing result parser."""
    return BingResultParser()


@pytest.fixture
def result_cache():
    """Provide a fresh result cache."""
    return ResultCache(expire_after_mins=60, max_size=100)


@pytest.fixture
def google_source():
    """Provide a mock source whose pages hold exactly the requested number of results."""
    return MockDocumentSource(lambda query, min_results: [google_page(min_results)])


@pytest.fixture
def google_search(google_source, google_parser, result_cache):
    """Provide a Google search engine backed by the mock source."""
    return CachingWebSearch(
        document_source=google_source,
        result_parser=google_parser,
        cache=result_cache,
    )


@pytest.fixture
def test_client():
    """Provide a FastAPI test client."""
    from main import app
    return TestClient(app)
