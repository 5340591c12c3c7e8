"""
Document Store Client.

pymongo async client and database handle management.
Uses lazy initialization to prevent import-time failures when the store
is not configured. The client owns a connection pool shared by all requests.
"""

from typing import Any

from pymongo import AsyncMongoClient

from temporal_books.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_client: AsyncMongoClient | None = None


def _create_client() -> AsyncMongoClient:
    """Create the async MongoDB client."""
    from temporal_books.core.config import get_app_config, get_connection_string

    db_config = get_app_config().database

    client: AsyncMongoClient = AsyncMongoClient(
        get_connection_string(),
        maxPoolSize=db_config.max_pool_size,
        serverSelectionTimeoutMS=db_config.server_selection_timeout_ms,
        tz_aware=True,
    )
    logger.debug("Document store client created", extra={"database": db_config.name})
    return client


def get_client() -> AsyncMongoClient:
    """
    Get the store client, creating it on first use.

    Returns:
        pymongo async client instance
    """
    global _client
    if _client is None:
        _client = _create_client()
    return _client


async def close_client() -> None:
    """Close the store client if it was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
        logger.debug("Document store client closed")


def get_database() -> Any:
    """
    Dependency that provides the books database handle.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db = Depends(get_database)):
            ...
    """
    from temporal_books.core.config import get_app_config

    return get_client()[get_app_config().database.name]
