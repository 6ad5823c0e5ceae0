"""
FastAPI Main Application - Archive search and recommendation API.

Run with: uvicorn prouvesearch.interfaces.api:create_app --factory --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prouvesearch import __version__
from prouvesearch.config import get_settings

from .deps import cleanup_services, get_corpus, init_services
from .middleware import ErrorHandlerMiddleware, RateLimitMiddleware, RequestContextMiddleware
from .routes import health, recommendations, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting Prouvé archive API...")
    logger.info("  Data dir: %s", settings.data_dir or "bundled corpus")

    await init_services()
    logger.info("  Services initialized: %d records", get_corpus().size)

    yield

    logger.info("Shutting down Prouvé archive API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Prouvé Archive API",
        description="Search, filtering and recommendations over the Jean Prouvé archive",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (last added = outermost)
    # 1. Rate limiting (innermost custom - request ID already set)
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.api_rate_limit_rpm)

    # 2. Error handling (catch exceptions from inner layers)
    app.add_middleware(ErrorHandlerMiddleware)

    # 3. Request ID and latency logging
    app.add_middleware(RequestContextMiddleware)

    # 4. CORS (framework middleware)
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]
    if settings.api_debug:
        allowed_origins.append("http://localhost:*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, prefix="/api/search", tags=["Search"])
    app.include_router(
        recommendations.router, prefix="/api/recommendations", tags=["Recommendations"]
    )

    return app


# Create app instance
app = create_app()
