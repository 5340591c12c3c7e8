# Pydantic schemas package
from temporal_books.schemas.base import (
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)
from temporal_books.schemas.patch import PatchOperation

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "PatchOperation",
    "ResponseMetadata",
]
