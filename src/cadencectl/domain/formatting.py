"""Human-readable date strings for event listings.

Month and weekday names are fixed English abbreviations so output does not
depend on the process locale.
"""

from __future__ import annotations

from datetime import datetime

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_date(d: datetime) -> str:
    """``Mon, Jan 8, 2024``"""
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}, {d.year}"


def format_time(d: datetime) -> str:
    return f"{d.hour:02d}:{d.minute:02d}"


def format_next_occurrence(d: datetime) -> str:
    return format_date(d)


def format_date_range(start: datetime | None, end: datetime | None) -> str:
    """Describe an event's span.

    Examples:
        >>> format_date_range(datetime(2024, 1, 1, 9), None)
        'Mon, Jan 1, 2024 • 09:00'
        >>> format_date_range(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10, 30))
        'Mon, Jan 1, 2024 • 09:00–10:30'
        >>> format_date_range(datetime(2024, 1, 1, 9), datetime(2024, 1, 2, 10))
        'Mon, Jan 1, 2024 09:00 → Tue, Jan 2, 2024 10:00'
    """
    if start is None:
        return ""
    date_part = format_date(start)
    if end is None:
        return f"{date_part} • {format_time(start)}"
    if start.date() == end.date():
        return f"{date_part} • {format_time(start)}–{format_time(end)}"
    return f"{date_part} {format_time(start)} → {format_date(end)} {format_time(end)}"
