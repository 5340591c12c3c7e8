"""
FastAPI Application Entry Point.

This is the main entry point for the books service.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from temporal_books.api import books, health
from temporal_books.core.config import AppConfig, get_app_config
from temporal_books.core.database import close_client, get_database
from temporal_books.core.exception_handlers import register_exception_handlers
from temporal_books.core.logging import get_logger, setup_logging
from temporal_books.core.middleware import RequestContextMiddleware
from temporal_books.repositories.book import BookStore

logger = get_logger(__name__)

_app: FastAPI | None = None


async def _ensure_indexes(app_config: AppConfig) -> None:
    """Create store indexes. An unreachable store is reported by /health/ready."""
    store = BookStore(get_database(), app_config.database.collections)
    try:
        await store.ensure_indexes()
    except PyMongoError as e:
        logger.warning("Store indexes not ensured", extra={"error": str(e)})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "database": app_config.database.name,
        },
    )
    await _ensure_indexes(app_config)
    yield
    await close_client()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(books.router, prefix="/books", tags=["books"])

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn temporal_books.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
