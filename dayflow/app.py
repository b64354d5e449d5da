"""
FastAPI application factory

Usage:
    # Development with auto-reload
    uvicorn dayflow.app:create_app --factory --reload

    # Via the CLI
    dayflow start
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayflow import __version__
from dayflow.config.loader import ConfigLoader, get_config
from dayflow.core.auth import IdentityProvider, create_identity_provider
from dayflow.core.db import DatabaseManager, get_db
from dayflow.core.logger import get_logger
from dayflow.core.rate_limit import RateLimiter
from dayflow.handlers import register_fastapi_routes
from dayflow.handlers.common import install_exception_handlers
from dayflow.services.metadata import MetadataFetcher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI application lifecycle management"""
    logger.info("========== DayFlow Backend Starting ==========")
    logger.info(f"✓ Database: {app.state.db.db_path}")
    logger.info(
        f"✓ Rate limit: {app.state.rate_limiter.max_requests} requests / "
        f"{app.state.rate_limiter.window_seconds}s"
    )
    logger.info("========== DayFlow Backend Ready ==========")
    yield
    logger.info("DayFlow Backend stopped")


def create_app(
    config: Optional[ConfigLoader] = None,
    db: Optional[DatabaseManager] = None,
    rate_limiter: Optional[RateLimiter] = None,
    metadata_fetcher: Optional[MetadataFetcher] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    """Build the API application

    Collaborators not passed in are built from the configuration. Each app owns
    its own rate limiter.
    """
    config = config or get_config()

    app = FastAPI(
        title="DayFlow API",
        description="Tasks, ideas, links and settings",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if db is None:
        configured_path = config.get("database.path", "")
        db = DatabaseManager(configured_path) if configured_path else get_db()

    app.state.config = config
    app.state.db = db
    app.state.rate_limiter = rate_limiter or RateLimiter(
        max_requests=int(config.get("rate_limit.max_requests", 100)),
        window_seconds=int(config.get("rate_limit.window_seconds", 60)),
        cleanup_threshold=int(config.get("rate_limit.cleanup_threshold", 10_000)),
    )
    app.state.metadata_fetcher = metadata_fetcher or MetadataFetcher.from_config(config)
    app.state.identity_provider = identity_provider or create_identity_provider(config)

    @app.get("/health", tags=["system"])
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": __version__}

    install_exception_handlers(app)
    register_fastapi_routes(app, prefix="/api")
    return app
