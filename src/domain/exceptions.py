"""
Custom Exceptions for Hermes.

Hierarchical exception structure for clean error handling.
Only InvalidParamError and SearchError (with its subclasses)
leave the search engine.
"""

from typing import Any, Dict, Optional


class HermesException(Exception):
    """
    Base exception for all Hermes errors.

    Provides structured error information for logging and API responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "HERMES_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Validation Errors
# =============================================================================

class InvalidParamError(HermesException):
    """
    Raised when a caller supplies a structurally invalid parameter.

    Blank queries, non-positive result counts and unsupported providers
    end up here. Never retried.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="INVALID_PARAM",
            details={**(details or {}), "field": field} if field else details,
        )
        self.field = field


# =============================================================================
# Search Errors
# =============================================================================

class SearchError(HermesException):
    """Errors raised while executing, fetching or parsing a web search."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        query: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        context = dict(details or {})
        if provider:
            context["provider"] = provider
        if query is not None:
            context["query"] = query
        super().__init__(
            message=message,
            code="SEARCH_ERROR",
            details=context,
        )
        self.provider = provider
        self.query = query


class DocumentStructureError(SearchError):
    """Raised when a result page lacks the expected layout markers."""

    def __init__(self, marker: str, provider: Optional[str] = None):
        super().__init__(
            message=f"Document does not contain search results identified by '{marker}'",
            provider=provider,
            details={"marker": marker},
        )
        self.code = "DOCUMENT_STRUCTURE_ERROR"
        self.marker = marker


class TransportError(SearchError):
    """Raised when a result page cannot be retrieved from the provider."""

    def __init__(
        self,
        message: str,
        query: str,
        page: Optional[int] = None,
        status_code: Optional[int] = None,
    ):
        details: Dict[str, Any] = {}
        if page is not None:
            details["page"] = page
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message=message, query=query, details=details)
        self.code = "TRANSPORT_ERROR"
        self.page = page
        self.status_code = status_code
