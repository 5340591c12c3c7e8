"""
Integration Test Fixtures.

Fixtures for integration tests. The document store is an in-memory
mongomock database exposing the async pymongo API, one per test.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from temporal_books.core.database import get_database
from temporal_books.repositories.book import BookStore


# =============================================================================
# Document Store Fixtures
# =============================================================================


@pytest.fixture
async def mongo_database() -> Any:
    """Fresh in-memory database for one test, with the store indexes."""
    database = AsyncMongoMockClient()[f"books-{uuid4().hex}"]
    await BookStore(database).ensure_indexes()
    return database


@pytest.fixture
def store(mongo_database: Any) -> BookStore:
    """BookStore over the in-memory database, default collection names."""
    return BookStore(mongo_database)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(mongo_database: Any) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client with the database dependency pointing at the in-memory store.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from temporal_books.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: mongo_database

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Helpers
# =============================================================================


@pytest.fixture
def rows(mongo_database: Any) -> Callable[..., Awaitable[list[dict[str, Any]]]]:
    """
    Read raw rows of a collection in insertion order, technical id removed.

    Usage:
        changes = await rows("books-changes", "e1")
    """

    async def _rows(collection: str, entity_id: str | None = None) -> list[dict[str, Any]]:
        query = {"entityId": entity_id} if entity_id is not None else {}
        cursor = mongo_database[collection].find(query, {"_id": 0}, sort=[("_id", 1)])
        return [document async for document in cursor]

    return _rows


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> Any:
        """Assert the response is successful and return its JSON body."""
        assert response.status_code == expected_status, (
            f"Expected {expected_status}, got {response.status_code}: {response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """Assert the response is an error envelope with the given status and code."""
        assert response.status_code == expected_status, (
            f"Expected {expected_status}, got {response.status_code}: {response.text}"
        )
        data = response.json()
        assert data["success"] is False
        assert data["error"] is not None
        if expected_code:
            assert data["error"]["code"] == expected_code, (
                f"Expected error code {expected_code}, got {data['error']['code']}"
            )
        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
