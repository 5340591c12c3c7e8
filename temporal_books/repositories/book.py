"""
Book Store Gateway.

The three collections behind the temporal write path:

    books-changes    append-only change log (ChangeUnit)
    books-states     append-only state history (StateSnapshot)
    books-bestsofar  current state, one row per entityId (Book)

Operations are not wrapped in a cross-collection transaction.
"""

from typing import Any

from temporal_books.core.config_schema import CollectionsSchema
from temporal_books.core.query import OrderBy
from temporal_books.models.book import ARCHIVED_STATUS, Book
from temporal_books.models.envelopes import ChangeUnit, StateSnapshot
from temporal_books.repositories.base import DocumentRepository

DEFAULT_COLLECTIONS = CollectionsSchema(
    changes="books-changes",
    states="books-states",
    best_so_far="books-bestsofar",
)

NOT_ARCHIVED_FILTER: dict[str, Any] = {
    "$or": [
        {"editing": None},
        {"editing.status": None},
        {"editing.status.value": {"$ne": ARCHIVED_STATUS}},
    ]
}


class BookStore:
    """
    Gateway over the three book collections of one database.

    The database handle is injected so tests can run against an
    in-memory store.
    """

    def __init__(self, database: Any, collections: CollectionsSchema | None = None) -> None:
        names = collections or DEFAULT_COLLECTIONS
        self.changes = DocumentRepository(database[names.changes])
        self.states = DocumentRepository(database[names.states])
        self.best_so_far = DocumentRepository(database[names.best_so_far])

    async def ensure_indexes(self) -> None:
        """One current-state row per entityId."""
        await self.best_so_far.ensure_unique_key()

    async def append_change(self, change: ChangeUnit) -> None:
        await self.changes.append(change.to_document())

    async def append_state(self, snapshot: StateSnapshot) -> None:
        await self.states.append(snapshot.to_document())

    async def find_current(self, entity_id: str) -> Book | None:
        """Get the current state of a book, or None."""
        document = await self.best_so_far.find_one(entity_id)
        return Book.from_document(document) if document is not None else None

    async def insert_current(self, book: Book) -> None:
        await self.best_so_far.append(book.to_document())

    async def replace_current(self, entity_id: str, book: Book) -> None:
        await self.best_so_far.replace_one(entity_id, book.to_document())

    async def find_current_many(
        self,
        skip: int = 0,
        top: int = 20,
        order_by: OrderBy | None = None,
    ) -> list[Book]:
        """List current states, archived books excluded."""
        documents = await self.best_so_far.find_many(
            filter=NOT_ARCHIVED_FILTER,
            skip=skip,
            limit=top,
            sort=order_by.sort if order_by else None,
        )
        return [Book.from_document(document) for document in documents]

    async def count_current(self) -> int:
        """Count current-state rows, archived books included."""
        return await self.best_so_far.count()

    async def purge(self, entity_id: str) -> dict[str, int]:
        """Delete every row of a book in all three collections."""
        return {
            self.changes.name: await self.changes.delete_many(entity_id),
            self.states.name: await self.states.delete_many(entity_id),
            self.best_so_far.name: await self.best_so_far.delete_many(entity_id),
        }
