"""
Document Source Port - Abstract interface for retrieving result pages.
"""

from abc import ABC, abstractmethod
from typing import List

from bs4 import BeautifulSoup


class DocumentSourcePort(ABC):
    """
    Abstract base class for search result page sources.

    A source performs the HTTP round trip(s) against a provider's
    search endpoint and returns the raw pages as parsed documents.
    """

    @abstractmethod
    async def fetch(self, query: str, min_results: int) -> List[BeautifulSoup]:
        """
        Retrieve result pages holding at least ``min_results`` items.

        Args:
            query: Search query string, not blank
            min_results: Minimum number of results requested, at least 1

        Returns:
            Non-empty list of documents, ordered by result offset

        Raises:
            TransportError: If any page could not be retrieved
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the source."""
        return None
