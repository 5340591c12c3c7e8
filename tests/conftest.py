"""
Root Pytest Fixtures.

Shared fixtures available to all test types.
"""

from datetime import date

import pytest

from temporal_books.models.book import Book, Editing, MonetaryAmount, Sales, Status


@pytest.fixture
def full_book() -> Book:
    """A book with every attribute known."""
    return Book(
        entity_id="e1",
        isbn="978-2-409-03806-1",
        title="Temporal Data",
        number_of_pages=512,
        publish_date=date(2023, 3, 14),
        editing=Editing(number_of_chapters=12, status=Status(value="Writing")),
        sales=Sales(
            price=MonetaryAmount(value=39.9, monetary_unit="USD"),
            weight_in_grams=820.0,
        ),
    )


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
