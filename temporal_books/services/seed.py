"""
Sample Data.

Builds a few sample books and creates them through the BookService so
that they go through the full temporal write path.
"""

import random
from datetime import date, timedelta

from temporal_books.models.book import (
    EDITORIAL_STATUSES,
    Book,
    Editing,
    MonetaryAmount,
    Sales,
    Status,
)
from temporal_books.services.book import BookService


def sample_books(count: int = 3, rng: random.Random | None = None) -> list[Book]:
    """Build sample books numbered 1..count."""
    rng = rng or random.Random()
    today = date.today()
    return [
        Book(
            entity_id=str(index),
            isbn=f"978-2-409-03806-{index}",
            number_of_pages=rng.randint(400, 850),
            publish_date=today + timedelta(days=index),
            editing=Editing(
                number_of_chapters=rng.randint(5, 30),
                status=Status(value=rng.choice(EDITORIAL_STATUSES)),
            ),
            sales=Sales(
                price=MonetaryAmount(value=rng.randint(1000, 10000) / 100, monetary_unit="USD"),
                weight_in_grams=float(rng.randint(200, 3500)),
            ),
        )
        for index in range(1, count + 1)
    ]


async def seed_books(service: BookService, count: int = 3) -> list[Book]:
    """Create the sample books and return their resulting states."""
    return [await service.create(book) for book in sample_books(count)]
