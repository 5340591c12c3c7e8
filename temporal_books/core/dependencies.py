"""
FastAPI Dependencies.

Shared dependencies for request handling. The store gateway is built per
request from the pooled database handle.
"""

from typing import Annotated, Any

from fastapi import Depends

from temporal_books.core.config import get_app_config
from temporal_books.core.database import get_database
from temporal_books.repositories.book import BookStore
from temporal_books.services.book import BookService

# Type alias for the database handle dependency
Database = Annotated[Any, Depends(get_database)]


def get_book_store(db: Database) -> BookStore:
    """Build the book store gateway over the configured collections."""
    return BookStore(db, get_app_config().database.collections)


def get_book_service(store: Annotated[BookStore, Depends(get_book_store)]) -> BookService:
    """Build the book service."""
    return BookService(store)


BookServiceDep = Annotated[BookService, Depends(get_book_service)]
