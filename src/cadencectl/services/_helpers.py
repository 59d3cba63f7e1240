"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import datetime


def local_now() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    return datetime.now()


def iso_minutes(d: datetime) -> str:
    """ISO 8601 without seconds when they are zero (``2024-01-08T09:00``).

    Examples:
        >>> iso_minutes(datetime(2024, 1, 8, 9, 0))
        '2024-01-08T09:00'
        >>> iso_minutes(datetime(2024, 1, 8, 9, 0, 30))
        '2024-01-08T09:00:30'
    """
    if d.second == 0 and d.microsecond == 0:
        return d.isoformat(timespec="minutes")
    return d.isoformat()
