"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate the store gateway and implement business rules.

Usage:
    from temporal_books.services.base import BaseService

    class ShelfService(BaseService):
        def __init__(self, store: ShelfStore) -> None:
            super().__init__()
            self.store = store

        async def get_shelf(self, shelf_id: str) -> Shelf:
            return await self._execute_db_operation(
                "get_shelf", self.store.find_current(shelf_id)
            )
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from pymongo.errors import DuplicateKeyError, PyMongoError

from temporal_books.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from temporal_books.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Error wrapping for store operations
    - Common validation patterns
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a store operation with error handling.

        Wraps store driver exceptions into application exceptions.

        Raises:
            ConflictError: For duplicate key violations
            DatabaseError: For other store errors
        """
        try:
            return await coro
        except DuplicateKeyError as e:
            self._logger.warning(
                "Store duplicate key",
                extra={"operation": operation, "error": str(e)},
            )
            raise ConflictError("Resource already exists") from e
        except PyMongoError as e:
            self._logger.error(
                "Store error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
