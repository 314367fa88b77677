"""
Result Parser Port - Abstract interface for provider-specific extractors.
"""

from abc import ABC, abstractmethod
from typing import List

from bs4 import BeautifulSoup

from src.domain.models import SearchResultRecord


class ResultParserPort(ABC):
    """
    Abstract base class for search result page parsers.

    One implementation exists per provider, since every provider
    lays out its result pages differently.
    """

    provider: str = ""

    @property
    @abstractmethod
    def structure_marker(self) -> str:
        """Selector identifying the results on a well-formed page."""
        pass

    @abstractmethod
    def parse(self, document: BeautifulSoup) -> List[SearchResultRecord]:
        """
        Extract all parsable results from a result page.

        Args:
            document: A search result page

        Returns:
            Records in page order, possibly empty

        Raises:
            DocumentStructureError: If the page lacks the expected results markers
            SearchError: If a result item cannot be mapped
        """
        pass
