"""Shared utility functions."""

from .timestamps import TIMESTAMP_FORMAT, ensure_utc, format_timestamp, utc_now

__all__ = [
    "TIMESTAMP_FORMAT",
    "utc_now",
    "ensure_utc",
    "format_timestamp",
]
