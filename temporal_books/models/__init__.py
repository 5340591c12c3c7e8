# Domain records and persisted envelopes
from temporal_books.models.book import (
    ARCHIVED_STATUS,
    Book,
    Editing,
    MonetaryAmount,
    Sales,
    Status,
)
from temporal_books.models.envelopes import ChangeUnit, StateSnapshot

__all__ = [
    "ARCHIVED_STATUS",
    "Book",
    "ChangeUnit",
    "Editing",
    "MonetaryAmount",
    "Sales",
    "StateSnapshot",
    "Status",
]
