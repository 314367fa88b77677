"""
Bing Search Result Parser.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from src.adapters.search.html_utils import element_text
from src.application.ports.result_parser_port import ResultParserPort
from src.domain.exceptions import DocumentStructureError, SearchError
from src.domain.models import SearchResultRecord

ID_RESULT_LIST = "b_results"
CLASS_RESULT_ITEM = "b_algo"


class BingResultParser(ResultParserPort):
    """
    Parser for Bing web search result pages.

    The result list holds ads, answer boxes and pagination next to the
    organic results; only children classed exactly ``b_algo`` are parsed.
    """

    provider = "bing"

    @property
    def structure_marker(self) -> str:
        return f"#{ID_RESULT_LIST}"

    def parse(self, document: BeautifulSoup) -> List[SearchResultRecord]:
        container = document.find(id=ID_RESULT_LIST)
        if container is None:
            raise DocumentStructureError(self.structure_marker, provider=self.provider)

        try:
            return [
                self._parse_result(child)
                for child in container.find_all(recursive=False)
                if self._is_parsable_result(child)
            ]
        except Exception as e:
            raise SearchError(
                message=f"An error occurred while trying to parse a Bing search result: {e}",
                provider=self.provider,
                details={"operation": "parse"},
            ) from e

    def _is_parsable_result(self, item: Tag) -> bool:
        return item.get("class") == [CLASS_RESULT_ITEM]

    def _parse_result(self, item: Tag) -> SearchResultRecord:
        title = item.select_one("a[href]")
        return SearchResultRecord(
            title=element_text(title),
            snippet=element_text(item.select_one("p")),
            url=self._parse_url(title),
            # Bing does not expose page hierarchy information
            page_hierarchy=None,
        )

    def _parse_url(self, title: Optional[Tag]) -> Optional[str]:
        if title is None:
            return None
        href = title["href"]
        return href if href.strip() else None
