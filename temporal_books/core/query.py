"""
Query Options.

OData-style listing parameters ($orderby, $skip, $top) for collection
endpoints, and their translation to a document store sort.
"""

from dataclasses import dataclass, field
from typing import get_args

from fastapi import Query
from pydantic import BaseModel

from temporal_books.models.book import Book

DEFAULT_SKIP = 0
DEFAULT_TOP = 20
MAX_TOP = 100


def _sortable_paths(model: type[BaseModel], prefix: str = "") -> set[str]:
    """Dotted camelCase paths of every scalar attribute of a model."""
    paths: set[str] = set()
    for name, info in model.model_fields.items():
        key = prefix + (info.alias or name)
        nested = [
            arg for arg in get_args(info.annotation)
            if isinstance(arg, type) and issubclass(arg, BaseModel)
        ]
        if nested:
            paths |= _sortable_paths(nested[0], key + ".")
        else:
            paths.add(key)
    return paths


SORTABLE_PATHS = frozenset(_sortable_paths(Book))


@dataclass
class OrderBy:
    """Parsed $orderby clause."""

    sort: list[tuple[str, int]] = field(default_factory=list)

    @classmethod
    def parse(cls, expression: str | None) -> "OrderBy":
        """
        Parse a comma-separated list of 'attribute [asc|desc]' items.

        Nested attributes use '/' or '.' separators. Unknown attributes and
        repeated attributes are ignored.
        """
        sort: list[tuple[str, int]] = []
        seen: set[str] = set()
        for item in (expression or "").split(","):
            parts = item.split()
            if not parts:
                continue
            path = parts[0].replace("/", ".")
            if path not in SORTABLE_PATHS or path in seen:
                continue
            direction = -1 if len(parts) > 1 and parts[1].lower() == "desc" else 1
            sort.append((path, direction))
            seen.add(path)
        return cls(sort=sort)

    def __bool__(self) -> bool:
        return bool(self.sort)


@dataclass
class QueryOptions:
    """Listing parameters extracted from the query string."""

    order_by: OrderBy
    skip: int = DEFAULT_SKIP
    top: int = DEFAULT_TOP


def get_query_options(
    orderby: str = Query(
        default="",
        alias="$orderby",
        description="Comma-separated attributes, each optionally followed by 'desc'",
    ),
    skip: int = Query(
        default=DEFAULT_SKIP,
        alias="$skip",
        ge=0,
        description="Number of books to skip",
    ),
    top: int = Query(
        default=DEFAULT_TOP,
        alias="$top",
        ge=1,
        le=MAX_TOP,
        description="Maximum number of books to return",
    ),
) -> QueryOptions:
    """
    FastAPI dependency for listing parameters.

    Usage:
        @router.get("")
        async def list_books(options: QueryOptions = Depends(get_query_options)):
            ...
    """
    return QueryOptions(order_by=OrderBy.parse(orderby), skip=skip, top=top)
