"""
Web Search Client - Retrieves result pages from a provider's web UI.

This module implements the DocumentSource port by issuing plain GET
requests against a search endpoint (e.g. http://www.bing.com/search)
and handing back the HTML as BeautifulSoup documents.
"""

import math
import time
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from src.application.ports.document_source_port import DocumentSourcePort
from src.config.logging import get_logger
from src.config.settings import DEFAULT_USER_AGENT
from src.domain.exceptions import InvalidParamError, TransportError

logger = get_logger(__name__)

# Providers tend to return fewer usable results than asked for when a
# single page is filled close to its limit
PAGE_SAFETY_MARGIN = 4


class WebSearchClientConfig(BaseModel):
    """Connection and pagination settings for one search provider."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    search_url: str = Field(..., min_length=1, description="Search endpoint URL")
    query_param: str = Field(..., min_length=1, description="Name of the query parameter")
    result_count_param: str = Field(..., min_length=1, description="Name of the result count parameter")
    offset_param: str = Field(..., min_length=1, description="Name of the start offset parameter")
    max_results_per_page: int = Field(..., ge=1, description="Most results a single page can hold")
    offset_base: int = Field(default=0, ge=0, le=1, description="Offset of the first result (0 or 1)")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")


class WebSearchClient(DocumentSourcePort):
    """
    HTTP client for a single search provider.

    Owns one httpx.AsyncClient for its lifetime. The cookie jar is
    emptied before every request, so cookies set by the provider for one
    query are never sent along with another.
    """

    def __init__(
        self,
        config: WebSearchClientConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the web search client.

        Args:
            config: Provider endpoint and pagination settings
            client: Pre-built HTTP client (mainly for tests)
        """
        self._config = config
        self._client = client or httpx.AsyncClient(
            timeout=config.timeout,
            follow_redirects=True,
        )

    @property
    def config(self) -> WebSearchClientConfig:
        return self._config

    async def fetch(self, query: str, min_results: int) -> List[BeautifulSoup]:
        """
        Retrieve enough result pages to hold ``min_results`` items.

        A single page is requested when the count fits comfortably into
        one page; otherwise full pages are requested one after another
        with an increasing start offset. A failing page aborts the call.
        """
        if query is None or not query.strip():
            raise InvalidParamError("Query must be neither null nor blank", field="query")
        if min_results < 1:
            raise InvalidParamError("Result count must be greater than 0", field="result_count")

        start_time = time.perf_counter()
        per_page = self._config.max_results_per_page

        if min_results <= per_page - PAGE_SAFETY_MARGIN:
            documents = [await self._fetch_page(query, min_results)]
        else:
            page_count = math.ceil(min_results / per_page)
            documents = []
            for page in range(page_count):
                offset = self._config.offset_base + page * per_page
                documents.append(
                    await self._fetch_page(query, per_page, offset=offset, page=page)
                )

        logger.info(
            "web_search_complete",
            search_url=self._config.search_url,
            query=query,
            min_results=min_results,
            pages=len(documents),
            duration_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return documents

    async def _fetch_page(
        self,
        query: str,
        result_count: int,
        offset: Optional[int] = None,
        page: Optional[int] = None,
    ) -> BeautifulSoup:
        """Execute one GET request and parse the response body."""
        params = {
            self._config.query_param: query,
            self._config.result_count_param: str(result_count),
        }
        if offset is not None:
            params[self._config.offset_param] = str(offset)

        page_info = f" (page {page + 1})" if page is not None else ""
        start_time = time.perf_counter()

        # Provider cookies must not link unrelated queries
        self._client.cookies.clear()

        try:
            response = await self._client.get(
                self._config.search_url,
                params=params,
                headers={"User-Agent": self._config.user_agent},
            )
            response.raise_for_status()
            html = response.content.decode(response.encoding or "utf-8")
            document = BeautifulSoup(html, "html.parser")
        except httpx.HTTPStatusError as e:
            raise TransportError(
                message=(
                    f"Web search for query '{query}'{page_info} failed "
                    f"with HTTP {e.response.status_code}"
                ),
                query=query,
                page=page,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                message=(
                    f"An error occurred while trying to execute a web search "
                    f"for query '{query}'{page_info}: {e}"
                ),
                query=query,
                page=page,
            ) from e
        except UnicodeDecodeError as e:
            raise TransportError(
                message=f"Could not decode web search response for query '{query}'{page_info}",
                query=query,
                page=page,
            ) from e

        logger.debug(
            "web_search_request_complete",
            search_url=self._config.search_url,
            query=query,
            result_count=result_count,
            offset=offset,
            duration_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return document

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
