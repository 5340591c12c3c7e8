"""
Persisted Envelopes.

Append-only records written by every mutation: the change unit holding the
raw JSON Patch, and the snapshot holding the resulting state.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from temporal_books.models.base import DocumentModel
from temporal_books.models.book import Book


class ChangeUnit(DocumentModel):
    """One persisted JSON Patch document plus its envelope."""

    entity_id: str
    value_date: datetime
    patch_content: list[dict[str, Any]] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        # Value dates are stored as native store timestamps.
        document = self.model_dump(by_alias=True, exclude={"patch_content"})
        document["patchContent"] = [dict(operation) for operation in self.patch_content]
        return document


class StateSnapshot(DocumentModel):
    """Full Book value produced by a change, tagged with its value date."""

    entity_id: str
    value_date: datetime
    state: Book

    def to_document(self) -> dict[str, Any]:
        return {
            "entityId": self.entity_id,
            "valueDate": self.value_date,
            "state": self.state.to_document(),
        }
