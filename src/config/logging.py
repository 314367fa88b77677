"""
Structured Logging Configuration using structlog.

Search requests, cache hits and retry decisions are logged as
snake_case events with key-value context. While a search runs, its
provider and normalized query are bound to the context, so events
emitted by the HTTP client and the parsers carry them too.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Literal, Optional

import structlog
from structlog.typing import Processor

from src.config.settings import get_settings

# Chatty third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[Literal["json", "text"]] = None,
) -> None:
    """
    Configure structured logging for the application.

    Both structlog events and records from standard library loggers
    (uvicorn, httpx) are rendered by the same processor chain.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Override log format (json for production, text for development)
    """
    settings = get_settings()
    level = log_level or settings.app.log_level
    fmt = log_format or settings.app.log_format

    shared = _shared_processors()
    renderer = _renderer(fmt)

    exception_processors: list[Processor] = (
        [structlog.processors.format_exc_info] if fmt == "json" else []
    )

    structlog.configure(
        processors=shared + exception_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


@contextmanager
def search_context(provider: str, query: str) -> Iterator[None]:
    """
    Bind a search's provider and query to every event logged inside.

    Args:
        provider: Provider identifier, e.g. "google"
        query: Normalized query
    """
    with structlog.contextvars.bound_contextvars(search_provider=provider, search_query=query):
        yield


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
