from .models import (
    # Search Models
    SearchResultRecord,
    SearchProvider,
    # API Models
    ErrorResponse,
    HealthResponse,
)
from .exceptions import (
    HermesException,
    InvalidParamError,
    SearchError,
    DocumentStructureError,
    TransportError,
)

__all__ = [
    # Search Models
    "SearchResultRecord",
    "SearchProvider",
    # API Models
    "ErrorResponse",
    "HealthResponse",
    # Exceptions
    "HermesException",
    "InvalidParamError",
    "SearchError",
    "DocumentStructureError",
    "TransportError",
]
