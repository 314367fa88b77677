"""
Domain Models - Pydantic models for the search engine and its API boundary.

This module contains:
- The search result record produced by the result parsers
- The supported search providers
- API response schemas
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Search Models
# =============================================================================

class SearchResultRecord(BaseModel):
    """
    A single result item parsed from a search result page.

    Every field is optional: extraction from HTML is best-effort and a
    record missing some (or all) fields is still a valid parse outcome.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(None, description="Result title")
    snippet: Optional[str] = Field(None, description="Result snippet/description")
    url: Optional[str] = Field(None, description="Target URL of the result")
    page_hierarchy: Optional[str] = Field(
        None,
        description="Breadcrumb-like page path, only exposed by some providers",
    )


class SearchProvider(str, Enum):
    """The web search providers supported by the application."""

    GOOGLE = "google"
    BING = "bing"

    @classmethod
    def find(cls, value: Optional[str]) -> Optional["SearchProvider"]:
        """
        Match a provider identifier case-insensitively.

        Returns:
            The matching provider, or None if nothing matches
        """
        if value is None:
            return None
        if isinstance(value, SearchProvider):
            return value
        token = value.strip().lower()
        for provider in cls:
            if provider.value == token:
                return provider
        return None


# =============================================================================
# API Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standardized error body returned by the HTTP API."""

    code: int = Field(..., description="HTTP status code")
    message: Optional[str] = Field(None, description="Human-readable error message")


class HealthResponse(BaseModel):
    """Response schema for GET /health."""

    status: str = Field(..., description="Overall service status")
    version: str = Field(..., description="Application version")
    cached_queries: Dict[str, int] = Field(
        default_factory=dict,
        description="Number of cached queries per provider",
    )
