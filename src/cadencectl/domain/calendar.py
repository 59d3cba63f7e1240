"""Calendar arithmetic on naive local date-times.

All instants are naive ``datetime`` values interpreted in the host's local
calendar. Day and week steps are wall-clock preserving: adding a day keeps
the same hour even across a daylight-saving change.

Weekdays use the 0 = Sunday … 6 = Saturday numbering throughout.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

DAYS_PER_WEEK = 7


def start_of_day(instant: datetime) -> datetime:
    """Same calendar date at 00:00:00.000000."""
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def add_days(instant: datetime, days: int) -> datetime:
    return instant + timedelta(days=days)


def add_weeks(instant: datetime, weeks: int) -> datetime:
    return add_days(instant, weeks * DAYS_PER_WEEK)


def add_months(instant: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length.

    ``Jan 31 + 1 month`` is the last day of February, never early March.
    """
    index = instant.year * 12 + (instant.month - 1) + months
    year, month0 = divmod(index, 12)
    month = month0 + 1
    last_day = calendar.monthrange(year, month)[1]
    return instant.replace(year=year, month=month, day=min(instant.day, last_day))


def copy_time_of_day(date_only: datetime | date, anchor: datetime) -> datetime:
    """Stamp *anchor*'s time-of-day onto *date_only*'s calendar date."""
    return datetime.combine(
        date(date_only.year, date_only.month, date_only.day),
        time(anchor.hour, anchor.minute, anchor.second, anchor.microsecond),
    )


def weeks_between(a: datetime, b: datetime) -> int:
    """Whole 7-day periods from the start of *a*'s day to the start of *b*'s.

    Floors toward negative infinity, so *b* before *a* gives a negative count.
    """
    elapsed = start_of_day(b) - start_of_day(a)
    return elapsed.days // DAYS_PER_WEEK


def day_of_week(instant: datetime | date) -> int:
    """Weekday with Sunday as 0."""
    return (instant.weekday() + 1) % DAYS_PER_WEEK


def nth_weekday_of_month(year: int, month: int, weekday: int, week_of_month: int) -> datetime:
    """Midnight of the *week_of_month*-th *weekday* in ``year-month``.

    There is no range check on the result: asking for a 5th occurrence in a
    month that has only four returns a date in the following month.
    """
    first = datetime(year, month, 1)
    offset = (weekday - day_of_week(first) + DAYS_PER_WEEK) % DAYS_PER_WEEK
    return add_days(first, offset + (week_of_month - 1) * DAYS_PER_WEEK)


def parse_instant(value: object) -> datetime | None:
    """Parse an ISO 8601 date or date-time into a naive local ``datetime``.

    Date-only input means local midnight. Offset-aware input is converted to
    local wall-clock time. Returns None for empty or unparseable values.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
