"""FastAPI application entry point for grokipedia-api.

Configures middleware, exception handlers, lifecycle hooks, and routes.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.exceptions import ValidationError
from app.routes import articles, health, search
from app.schemas.common import error_response
from app.services.article_service import ArticleService
from app.services.extractors.base import ScraperConfig
from app.services.extractors.exceptions import ScraperError
from app.services.extractors.search_driver import SearchDriver

# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------

# Configure root logger with level from settings
logging.basicConfig(
    level=settings.get_log_level_int(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup / shutdown lifecycle."""
    # --- Startup ---
    config = ScraperConfig.from_settings(settings)
    app.state.article_service = ArticleService(config)
    app.state.search_driver = SearchDriver(config)

    logger.info("Starting grokipedia-api (env=%s)", settings.service_env)
    logger.info("Base URL: %s", config.base_url)
    logger.info("Port: %d", settings.port)
    logger.info("Endpoints:")
    logger.info("  GET /health - Health check")
    logger.info("  GET /api/article/{path} - Get article by path")
    logger.info("  GET /api/search?q={query} - Search articles")

    yield

    # --- Shutdown ---
    logger.info("Shutting down grokipedia-api")


# ---------------------------------------------------------------------------
# App instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title="grokipedia API",
    version=health.VERSION,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with method, path, status, and duration."""
    start = time.monotonic()
    response = await call_next(request)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


@app.exception_handler(ValidationError)
async def validation_exception_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Missing or empty required input."""
    return error_response(400, exc.message)


@app.exception_handler(ScraperError)
async def scraper_exception_handler(request: Request, exc: ScraperError) -> JSONResponse:
    """Fetch, parse or search failures not handled by a route."""
    logger.warning("Scraper error on %s %s: %s", request.method, request.url.path, exc)
    return error_response(500, str(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler that returns a structured JSON error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(500, "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

app.include_router(health.router)
app.include_router(articles.router)
app.include_router(search.router)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
