"""
Books API Endpoints.

Thin adapter translating HTTP requests to BookService calls. Successful
responses carry the bare book (camelCase keys, unknown attributes omitted).
"""

from datetime import datetime

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse, Response

from temporal_books.core.dependencies import BookServiceDep
from temporal_books.core.exceptions import ValidationError
from temporal_books.core.query import QueryOptions, get_query_options
from temporal_books.models.book import Book
from temporal_books.schemas.patch import PatchOperation

router = APIRouter()

@router.patch(
    "/{entity_id}",
    response_model=Book,
    response_model_exclude_none=True,
    summary="Patch a book",
    description="Apply an RFC 6902 JSON Patch to a book, creating it on first patch.",
)
async def patch_book(
    entity_id: str,
    service: BookServiceDep,
    patch: list[PatchOperation] | None = Body(default=None),
    provided_value_date: datetime | None = Query(
        default=None,
        alias="providedValueDate",
        description="Logical effective time of the change (defaults to now)",
    ),
) -> Book:
    """Patch a book."""
    if patch is None:
        raise ValidationError("Patch document is required")
    return await service.patch(entity_id, patch, provided_value_date)


@router.post(
    "",
    response_model=Book,
    response_model_exclude_none=True,
    summary="Create a book",
    description="Create a book from a whole value. A missing entityId is generated.",
)
async def create_book(
    book: Book,
    service: BookServiceDep,
    provided_value_date: datetime | None = Query(
        default=None,
        alias="providedValueDate",
        description="Logical effective time of the change (defaults to now)",
    ),
) -> Book:
    """Create a book."""
    return await service.create(book, provided_value_date)


@router.get(
    "",
    response_model=list[Book],
    response_model_exclude_none=True,
    summary="List books",
    description="List current books, archived ones excluded.",
)
async def list_books(
    service: BookServiceDep,
    options: QueryOptions = Depends(get_query_options),
) -> list[Book]:
    """List books."""
    return await service.get(options.order_by, skip=options.skip, top=options.top)


@router.get(
    "/$count",
    summary="Count books",
    description="Count current books, archived ones included.",
)
async def count_books(service: BookServiceDep) -> int:
    """Count books."""
    return await service.get_count()


@router.get(
    "/{entity_id}",
    response_model=Book,
    response_model_exclude_none=True,
    summary="Get a book",
    description="Get the current state of a book, archived or not.",
)
async def get_book(entity_id: str, service: BookServiceDep) -> Book:
    """Get a book by entityId."""
    return await service.get_unique(entity_id)


@router.delete(
    "/{entity_id}",
    response_model=None,
    summary="Delete a book",
    description=(
        "Archive a book (default), or remove it with its whole history "
        "when fullDeleteIncludingHistory is set."
    ),
)
async def delete_book(
    entity_id: str,
    service: BookServiceDep,
    provided_value_date: datetime | None = Query(
        default=None,
        alias="providedValueDate",
        description="Logical effective time of the change (defaults to now)",
    ),
    full_delete_including_history: bool = Query(
        default=False,
        alias="fullDeleteIncludingHistory",
        description="Purge the change log, state history and current state",
    ),
) -> Response:
    """Archive or purge a book."""
    book = await service.delete(entity_id, provided_value_date, full_delete_including_history)
    if book is None:
        return Response(status_code=200)
    return JSONResponse(content=book.to_document())
