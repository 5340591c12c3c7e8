"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as a timezone-aware datetime.

    Value dates are timestamps with offset, so the offset is kept.
    """
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
