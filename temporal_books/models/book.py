"""
Book Model.

A Book and its nested sub-records. Every attribute except the business
identifier is optional; absence means "unknown".
"""

from datetime import date

from temporal_books.models.base import DocumentModel

ARCHIVED_STATUS = "archived"

EDITORIAL_STATUSES = (
    "Idea",
    "AuthorChosen",
    "ContentDefined",
    "Writing",
    "Editing",
    "ReadyToPrint",
    "Available",
    "RetiredFromSales",
    "Archived",
)


class Status(DocumentModel):
    value: str | None = None


class Editing(DocumentModel):
    number_of_chapters: int | None = None
    status: Status | None = None


class MonetaryAmount(DocumentModel):
    value: float | None = None
    monetary_unit: str | None = None


class Sales(DocumentModel):
    price: MonetaryAmount | None = None
    weight_in_grams: float | None = None


class Book(DocumentModel):
    """
    Book record.

    entity_id is the caller-visible business key. It may be empty only on
    a create request, where the service assigns one.
    """

    entity_id: str | None = None
    isbn: str | None = None
    title: str | None = None
    number_of_pages: int | None = None
    publish_date: date | None = None
    editing: Editing | None = None
    sales: Sales | None = None

    @property
    def is_archived(self) -> bool:
        """Whether the book carries the archived editorial status."""
        return (
            self.editing is not None
            and self.editing.status is not None
            and self.editing.status.value == ARCHIVED_STATUS
        )

    def archived(self) -> "Book":
        """Return a copy with editing.status.value set to archived."""
        editing = self.editing.model_copy() if self.editing else Editing()
        editing.status = Status(value=ARCHIVED_STATUS)
        return self.model_copy(update={"editing": editing})

    def __repr__(self) -> str:
        return f"<Book(entity_id={self.entity_id!r}, title={self.title!r})>"
