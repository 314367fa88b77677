"""
Mock Document Source - Canned result pages for testing.

Serves pre-defined HTML instead of calling a provider, and records
every fetch so tests can assert on the number and size of requests.
"""

from typing import Callable, List, Sequence, Tuple, Union

from bs4 import BeautifulSoup

from src.application.ports.document_source_port import DocumentSourcePort
from src.config.logging import get_logger

logger = get_logger(__name__)

PageFactory = Callable[[str, int], Sequence[str]]


class MockDocumentSource(DocumentSourcePort):
    """
    Mock document source returning canned pages.

    Pages are either a fixed list of HTML strings (returned on every
    fetch) or a factory called with ``(query, min_results)``. A factory
    may raise to simulate transport failures.
    """

    def __init__(self, pages: Union[Sequence[str], PageFactory]):
        """
        Initialize the mock source.

        Args:
            pages: HTML pages, or a callable producing them per fetch
        """
        self._pages = pages
        self._calls: List[Tuple[str, int]] = []
        self.closed = False

    async def fetch(self, query: str, min_results: int) -> List[BeautifulSoup]:
        self._calls.append((query, min_results))

        logger.debug(
            "mock_source_fetch",
            query=query,
            min_results=min_results,
            call_count=len(self._calls),
        )

        pages = self._pages(query, min_results) if callable(self._pages) else self._pages
        return [BeautifulSoup(html, "html.parser") for html in pages]

    async def close(self) -> None:
        self.closed = True

    def get_call_count(self) -> int:
        """Get the number of fetches made."""
        return len(self._calls)

    def get_queries(self) -> List[str]:
        """Get all queries fetched."""
        return [query for query, _ in self._calls]

    def get_targets(self) -> List[int]:
        """Get the requested minimum result count of every fetch."""
        return [min_results for _, min_results in self._calls]

    def reset(self) -> None:
        """Reset the mock state."""
        self._calls.clear()
