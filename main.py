"""
Hermes - Web Search Result API

Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.api.dependencies import close_dependencies
from src.adapters.api.routes import router
from src.config.logging import setup_logging, get_logger
from src.config.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    setup_logging(
        log_level=settings.app.log_level,
        log_format=settings.app.log_format,
    )
    logger = get_logger(__name__)
    logger.info(
        "application_startup",
        app_name=settings.app.name,
        version=settings.app.version,
        debug=settings.app.debug,
        cache_expire_after_mins=settings.search.cache_expire_after_mins,
        cache_max_size=settings.search.cache_max_size,
        max_tries=settings.search.max_tries,
    )

    yield

    # Shutdown
    await close_dependencies()
    logger.info("application_shutdown")


settings = get_settings()

app = FastAPI(
    title="Hermes - Web Search Result API",
    description="""
## Overview

Hermes scrapes the public result pages of web search providers and returns
their results as structured JSON.

## Features

- **Providers**: Google and Bing
- **Result counts**: Request any number of results; large counts are paginated
- **Caching**: Results are cached per (case-insensitive) query

## Example Usage

```bash
curl "http://localhost:8000/api/search?q=python&n=10&p=bing"
```
    """,
    version=settings.app.version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, tags=["Search"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - points to docs."""
    return {
        "name": "Hermes - Web Search Result API",
        "version": settings.app.version,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.app.debug,
        workers=settings.api.workers,
    )
