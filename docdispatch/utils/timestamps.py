"""Timestamp utilities for UTC handling.

Report and payload timestamps use second precision with a 'Z' suffix
(e.g. ``2025-11-04T12:00:00Z``).
"""

from datetime import datetime, timezone
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_timestamp(dt: Optional[datetime] = None) -> str:
    """Format a datetime (default: now) as a second-precision UTC string.

    Example:
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, 0, 123456, tzinfo=timezone.utc))
        '2025-11-04T12:00:00Z'
    """
    return ensure_utc(dt or utc_now()).strftime(TIMESTAMP_FORMAT)
