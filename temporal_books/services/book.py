"""
Book Service.

The temporal CRUD protocol. Every mutation is a JSON Patch against one
book and is persisted three times:

    1. the raw patch, appended to the change log
    2. the resulting state, appended to the state history with its value date
    3. the resulting state, replacing the current (best-so-far) row

Whole-object creates and logical deletes are turned into patches first,
so all writes share the same pipeline. Queries only read current state.

The pipeline is not atomic across collections: a failure after the change
unit is appended leaves it without a successor snapshot.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import uuid4

from temporal_books.core.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    PatchConflictError,
)
from temporal_books.core.json_patch import apply_patch, make_patch, normalize_patch
from temporal_books.core.query import DEFAULT_SKIP, DEFAULT_TOP, OrderBy
from temporal_books.core.utils import ensure_aware, utc_now
from temporal_books.models.book import Book
from temporal_books.models.envelopes import ChangeUnit, StateSnapshot
from temporal_books.repositories.book import BookStore
from temporal_books.services.base import BaseService


def new_entity_id() -> str:
    """Fresh opaque identifier: 32 lowercase hex characters."""
    return uuid4().hex


class BookService(BaseService):
    """
    Service for book business logic.

    Holds no state across calls; all coordination goes through the store.
    """

    def __init__(self, store: BookStore) -> None:
        super().__init__()
        self.store = store

    async def patch(
        self,
        entity_id: str,
        patch: Iterable[Any] | None,
        provided_value_date: datetime | None = None,
    ) -> Book:
        """
        Apply a JSON Patch to a book and persist the change.

        Args:
            entity_id: Business identifier of the book
            patch: RFC 6902 operations
            provided_value_date: Logical effective time, defaults to now (UTC)

        Returns:
            The resulting book

        Raises:
            ValidationError: If the patch is missing or malformed
            PatchConflictError: If the patch cannot be applied
            DatabaseError: If the store fails
        """
        self._validate_required({"entity_id": entity_id}, ["entity_id"])
        operations = normalize_patch(patch)
        value_date = ensure_aware(provided_value_date) if provided_value_date else utc_now()

        self._log_operation(
            "Patching book",
            entity_id=entity_id,
            value_date=value_date.isoformat(),
            operation_count=len(operations),
        )

        change = ChangeUnit(entity_id=entity_id, value_date=value_date, patch_content=operations)
        await self._execute_db_operation("append_change", self.store.append_change(change))
        self._log_debug("Change unit appended", entity_id=entity_id)

        current = await self._load_or_create(entity_id)

        book = apply_patch(operations, current)
        if book.entity_id != entity_id:
            raise PatchConflictError("The entityId of a book cannot be changed by a patch")

        snapshot = StateSnapshot(entity_id=entity_id, value_date=value_date, state=book)
        await self._execute_db_operation("append_state", self.store.append_state(snapshot))
        self._log_debug("State snapshot appended", entity_id=entity_id)

        await self._execute_db_operation(
            "replace_current", self.store.replace_current(entity_id, book)
        )
        self._log_debug("Current state replaced", entity_id=entity_id)

        return book

    async def _load_or_create(self, entity_id: str) -> Book:
        """Load the current state, inserting a stub row on first patch."""
        current = await self._execute_db_operation(
            "find_current", self.store.find_current(entity_id)
        )
        if current is not None:
            return current

        self._log_debug("Inserting stub current state", entity_id=entity_id)
        try:
            await self._execute_db_operation(
                "insert_current", self.store.insert_current(Book(entity_id=entity_id))
            )
        except ConflictError:
            # Another writer inserted the stub first; its row is reloaded below.
            self._log_debug("Stub current state already present", entity_id=entity_id)
        current = await self._execute_db_operation(
            "find_current", self.store.find_current(entity_id)
        )
        if current is None:
            raise DatabaseError(f"Current state of book {entity_id} could not be reloaded")
        return current

    async def create(
        self,
        book: Book,
        provided_value_date: datetime | None = None,
    ) -> Book:
        """
        Create a book from a whole value.

        The value is turned into the patch that builds it from an empty book,
        then goes through patch(). An empty entity_id gets a fresh one.
        """
        entity_id = book.entity_id or new_entity_id()
        book = book.model_copy(update={"entity_id": entity_id})

        operations = make_patch(Book(), book)
        self._log_operation("Creating book", entity_id=entity_id)
        return await self.patch(entity_id, operations, provided_value_date)

    async def get(
        self,
        order_by: str | OrderBy | None = None,
        skip: int = DEFAULT_SKIP,
        top: int = DEFAULT_TOP,
    ) -> list[Book]:
        """
        List current books, archived ones excluded.

        Args:
            order_by: $orderby expression or parsed clause
            skip: Number of books to skip
            top: Maximum number of books to return
        """
        if not isinstance(order_by, OrderBy):
            order_by = OrderBy.parse(order_by)
        if top <= 0:
            return []

        self._log_debug("Listing books", sort=order_by.sort, skip=skip, top=top)
        return await self._execute_db_operation(
            "find_current_many",
            self.store.find_current_many(skip=max(skip, 0), top=top, order_by=order_by),
        )

    async def get_count(self) -> int:
        """Count current books, archived ones included."""
        return await self._execute_db_operation("count_current", self.store.count_current())

    async def get_unique(self, entity_id: str) -> Book:
        """
        Get the current state of a book, archived or not.

        Raises:
            NotFoundError: If no book has this entity_id
        """
        book = await self._execute_db_operation(
            "find_current", self.store.find_current(entity_id)
        )
        if book is None:
            raise NotFoundError(f"Book {entity_id} not found")
        return book

    async def delete(
        self,
        entity_id: str,
        provided_value_date: datetime | None = None,
        full_delete_including_history: bool = False,
    ) -> Book | None:
        """
        Archive a book, or purge it with its whole history.

        The logical delete is a patch setting editing.status.value to
        "archived" and returns the archived book. The purge removes every
        row of the book from the three collections and returns None.

        Raises:
            NotFoundError: On a logical delete of an unknown book
        """
        if full_delete_including_history:
            self._log_operation("Purging book history", entity_id=entity_id)
            deleted = await self._execute_db_operation("purge", self.store.purge(entity_id))
            self._log_debug("Book purged", entity_id=entity_id, deleted=deleted)
            return None

        book = await self.get_unique(entity_id)
        operations = make_patch(book, book.archived())

        self._log_operation("Archiving book", entity_id=entity_id)
        return await self.patch(entity_id, operations, provided_value_date)
