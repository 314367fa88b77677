"""
FastAPI Routes - REST API endpoints for Hermes.

Endpoints:
- GET /api/search - Run a web search against Google or Bing
- GET /health - Health check
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.adapters.api.dependencies import get_web_search_service
from src.application.services.caching_web_search import CachingWebSearch
from src.application.services.web_search_service import WebSearchService
from src.config.logging import get_logger
from src.config.settings import get_settings
from src.domain.exceptions import InvalidParamError, SearchError
from src.domain.models import ErrorResponse, HealthResponse, SearchResultRecord

logger = get_logger(__name__)

router = APIRouter()

SEARCH_FAILED_MESSAGE = "Something went wrong while trying to execute your search"


# =============================================================================
# Search Endpoints
# =============================================================================

@router.get(
    "/api/search",
    response_model=List[SearchResultRecord],
    summary="Returns web search results",
    description="""
    Acquire a specific number of search results from a given web search provider.

    **Parameters:**
    - `q`: The query string, case-insensitive
    - `n`: The number of results to be returned (default 10)
    - `p`: The web search provider, `google` (default) or `bing`, case-insensitive

    Results are cached per query for a configurable amount of time.
    """,
    responses={
        200: {"description": "The search was executed and its results parsed"},
        400: {
            "model": ErrorResponse,
            "description": "The query is blank, the count is below one, or the provider is invalid",
        },
        500: {
            "model": ErrorResponse,
            "description": "An error arose while executing the web search or processing its results",
        },
    },
)
async def search(
    q: str = Query(..., min_length=1, description="The query string, case-insensitive"),
    n: int = Query(10, ge=1, description="The number of results to be returned"),
    p: str = Query("google", description="The web search provider to be used"),
    service: WebSearchService = Depends(get_web_search_service),
) -> List[SearchResultRecord]:
    """Run a web search and return the parsed results."""
    logger.info(
        "search_request",
        query=q[:100],
        result_count=n,
        provider=p,
    )

    try:
        return await service.search(q, n, p)

    except InvalidParamError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorResponse(code=status.HTTP_400_BAD_REQUEST, message=e.message).model_dump(),
        )
    except SearchError as e:
        logger.warning(
            "search_request_failed",
            query=q[:100],
            provider=p,
            error_code=e.code,
            error=e.message,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ErrorResponse(
                code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message=SEARCH_FAILED_MESSAGE,
            ).model_dump(),
        )


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check the health of the Hermes service and the state of its search caches.",
)
async def health_check(
    service: WebSearchService = Depends(get_web_search_service),
) -> HealthResponse:
    """Report service status and the number of cached queries per provider."""
    settings = get_settings()

    cached_queries = {}
    for provider in service.providers:
        engine = service.engine_for(provider)
        if isinstance(engine, CachingWebSearch):
            cached_queries[provider.value] = len(engine.cache)

    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        cached_queries=cached_queries,
    )
