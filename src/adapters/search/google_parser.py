"""
Google Search Result Parser.

Targets the basic-HTML layout Google serves to simple user agents.
Result items are identified by their obfuscated div classes, which
Google rotates from time to time; a page without any matching item is
reported as a DocumentStructureError.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from src.adapters.search.html_utils import div_selector, element_text
from src.application.ports.result_parser_port import ResultParserPort
from src.domain.exceptions import DocumentStructureError, SearchError
from src.domain.models import SearchResultRecord

DIV_CLASSES_RESULT_ITEM = "Gx5Zad fP1Qef xpd EtOod pkphOe"
DIV_CLASSES_PAGE_HIERARCHY = "BNeawe UPmit AP7Wnd"
DIV_CLASSES_TITLE = "BNeawe vvjwJb AP7Wnd"
DIV_CLASSES_SNIPPET = "BNeawe s3v9rd AP7Wnd"

REDIRECT_PREFIX = "/url?q="
REDIRECT_SUFFIX = "&sa="


def unwrap_redirect(href: str) -> str:
    """
    Strip Google's ``/url?q=<target>&sa=...`` indirection.

    The target is returned verbatim; links without the wrapper are
    returned unchanged.
    """
    start = href.find(REDIRECT_PREFIX)
    if start < 0:
        return href
    url = href[start + len(REDIRECT_PREFIX):]
    end = url.find(REDIRECT_SUFFIX)
    return url if end < 0 else url[:end]


class GoogleResultParser(ResultParserPort):
    """Parser for Google web search result pages."""

    provider = "google"

    @property
    def structure_marker(self) -> str:
        return div_selector(DIV_CLASSES_RESULT_ITEM)

    def parse(self, document: BeautifulSoup) -> List[SearchResultRecord]:
        items = document.select(self.structure_marker)
        if not items:
            raise DocumentStructureError(self.structure_marker, provider=self.provider)

        try:
            return [self._parse_result(item) for item in items]
        except Exception as e:
            # Layout drift surfaces as arbitrary errors here
            raise SearchError(
                message=f"An error occurred while trying to parse a Google search result: {e}",
                provider=self.provider,
                details={"operation": "parse"},
            ) from e

    def _parse_result(self, item: Tag) -> SearchResultRecord:
        return SearchResultRecord(
            title=element_text(item.select_one(div_selector(DIV_CLASSES_TITLE))),
            snippet=element_text(item.select_one(div_selector(DIV_CLASSES_SNIPPET))),
            url=self._parse_url(item),
            page_hierarchy=element_text(item.select_one(div_selector(DIV_CLASSES_PAGE_HIERARCHY))),
        )

    def _parse_url(self, item: Tag) -> Optional[str]:
        link = item.select_one("a[href]")
        if link is None:
            return None
        href = link["href"]
        if not href.strip():
            return None
        return unwrap_redirect(href)
