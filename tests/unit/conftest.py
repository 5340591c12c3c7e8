"""
Unit Test Fixtures.

Fixtures for unit tests - the store gateway is mocked.
Unit tests never touch a document store.
"""

from unittest.mock import AsyncMock

import pytest

from temporal_books.repositories.book import BookStore
from temporal_books.services.book import BookService


@pytest.fixture
def mock_store() -> AsyncMock:
    """
    Mocked BookStore.

    Every gateway coroutine is an AsyncMock; the order of awaited calls is
    available through mock_store.mock_calls.
    """
    store = AsyncMock(spec=BookStore)
    store.find_current.return_value = None
    store.find_current_many.return_value = []
    store.count_current.return_value = 0
    store.purge.return_value = {}
    return store


@pytest.fixture
def service(mock_store: AsyncMock) -> BookService:
    """BookService over the mocked store."""
    return BookService(mock_store)

