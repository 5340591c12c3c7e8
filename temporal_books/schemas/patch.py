"""
Patch Schemas.

Pydantic schema for RFC 6902 operations in PATCH request bodies.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PatchOperation(BaseModel):
    """A single JSON Patch operation."""

    op: Literal["add", "remove", "replace", "move", "copy", "test"] = Field(
        description="Operation name",
        examples=["add"],
    )
    path: str = Field(
        pattern=r"^(/.*)?$",
        description="JSON pointer to the target location",
        examples=["/title"],
    )
    value: Any = Field(
        default=None,
        description="Value for add, replace and test",
    )
    from_: str | None = Field(
        default=None,
        alias="from",
        pattern=r"^(/.*)?$",
        description="Source pointer for move and copy",
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _check_members(self) -> "PatchOperation":
        if self.op in ("add", "replace", "test") and "value" not in self.model_fields_set:
            raise ValueError(f"'{self.op}' operation requires a value")
        if self.op in ("move", "copy") and self.from_ is None:
            raise ValueError(f"'{self.op}' operation requires 'from'")
        return self
