"""
Shared utility functions.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def parse_datetime(value: str, field_name: str = "date") -> datetime:
    """
    Parse an ISO-8601 date or datetime query value, raising a 400 HTTPException
    on invalid input instead of letting a bare ValueError bubble up as a 500.
    """
    try:
        return to_naive_local(datetime.fromisoformat(value.strip()))
    except (ValueError, AttributeError):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid date format for '{field_name}': {value!r}",
        )


def safe_error_detail(exc: Exception, fallback: str = "An internal error occurred. Please try again later.") -> str:
    """
    Return a sanitized error message safe for client consumption.
    Logs the real exception detail server-side.
    """
    logger.error(f"Operation failed: {exc}", exc_info=exc)
    return fallback


def now_local() -> datetime:
    """
    Return the current local time as a naive datetime (no tzinfo).
    Record timestamps and the "today" window share this clock, and the
    DB columns are TIMESTAMP WITHOUT TIME ZONE.
    """
    return datetime.now()


def to_naive_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def local_day_bounds(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Local midnight of ``now`` and local midnight of the following day."""
    now = now or now_local()
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)
