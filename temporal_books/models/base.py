"""
Document Model Base.

Base class for all records persisted in the document store. Attribute names
are snake_case in Python and camelCase on the wire and in stored documents.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base class for camelCase documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """
        JSON projection of the record.

        None values are dropped: an absent attribute and a null attribute
        both mean "unknown".
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "DocumentModel":
        """Build a record from a stored document, ignoring the technical id."""
        return cls.model_validate(
            {key: value for key, value in document.items() if key != "_id"}
        )
