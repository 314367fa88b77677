"""
Search Port - Abstract interface for result-acquisition engines.

This module defines the contract for components that turn
"give me N results for query Q" into a list of search result records.
"""

from abc import ABC, abstractmethod
from typing import List

from src.domain.models import SearchResultRecord


class SearchPort(ABC):
    """
    Abstract base class for web search engines.

    Implementations should handle:
    - Query validation and normalization
    - Fetching and parsing provider result pages
    - Retrying until the requested number of results is available
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        result_count: int,
    ) -> List[SearchResultRecord]:
        """
        Execute a web search and return exactly ``result_count`` results.

        Args:
            query: Search query string, case-insensitive
            result_count: Number of results to return, at least 1

        Returns:
            List of SearchResultRecord objects

        Raises:
            InvalidParamError: If the query is blank or the count is not positive
            SearchError: If the results could not be acquired
        """
        pass
