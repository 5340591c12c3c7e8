"""
Base Repository.

Access to one document store collection, addressed by business identifier.
Stored documents carry a store-assigned technical id (_id) that is never
returned to callers.
"""

from typing import Any

from temporal_books.core.logging import get_logger

logger = get_logger(__name__)

ENTITY_KEY = "entityId"
_HIDE_TECHNICAL_ID = {"_id": 0}


class DocumentRepository:
    """
    Repository over a single collection.

    Works with any async collection exposing the pymongo API
    (create_index, insert_one, find_one, find, replace_one, count_documents,
    delete_many).
    """

    def __init__(self, collection: Any) -> None:
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    async def ensure_unique_key(self) -> None:
        """Create the unique index on the business identifier if missing."""
        await self.collection.create_index(ENTITY_KEY, unique=True)
        logger.debug("Unique index ensured", extra={"collection": self.name, "key": ENTITY_KEY})

    async def append(self, document: dict[str, Any]) -> None:
        """Insert a new row. The input document is not modified."""
        await self.collection.insert_one(dict(document))

    async def find_one(self, entity_id: str) -> dict[str, Any] | None:
        """Get the first row matching the business identifier."""
        return await self.collection.find_one(
            {ENTITY_KEY: entity_id}, _HIDE_TECHNICAL_ID
        )

    async def replace_one(self, entity_id: str, document: dict[str, Any]) -> None:
        """Unconditionally replace the row matching the business identifier."""
        await self.collection.replace_one({ENTITY_KEY: entity_id}, dict(document))

    async def find_many(
        self,
        filter: dict[str, Any] | None = None,
        skip: int = 0,
        limit: int = 0,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Get rows matching a filter.

        Rows are returned in insertion order unless a sort is given; the
        insertion order always breaks ties.
        """
        order = list(sort or [])
        if not any(key == "_id" for key, _ in order):
            order.append(("_id", 1))

        cursor = self.collection.find(
            filter or {},
            _HIDE_TECHNICAL_ID,
            skip=skip,
            limit=limit,
            sort=order,
        )
        return [document async for document in cursor]

    async def count(self, filter: dict[str, Any] | None = None) -> int:
        """Count rows matching a filter (all rows by default)."""
        return await self.collection.count_documents(filter or {})

    async def delete_many(self, entity_id: str) -> int:
        """Delete every row for a business identifier."""
        result = await self.collection.delete_many({ENTITY_KEY: entity_id})
        logger.debug(
            "Rows deleted",
            extra={"collection": self.name, "entity_id": entity_id, "count": result.deleted_count},
        )
        return result.deleted_count
