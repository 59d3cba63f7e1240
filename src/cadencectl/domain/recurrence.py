"""Next-occurrence resolution for weekly and monthly cadences.

INVARIANT: A resolved occurrence is strictly after ``now``, never before the
anchor, and carries the anchor's time-of-day.

Every function here is pure. Malformed input resolves to None rather than
raising, so one bad event never stops the rest of a listing.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import assert_never

from cadencectl.domain.calendar import (
    DAYS_PER_WEEK,
    add_days,
    add_months,
    add_weeks,
    copy_time_of_day,
    day_of_week,
    nth_weekday_of_month,
    parse_instant,
    start_of_day,
    weeks_between,
)
from cadencectl.domain.cadence import MonthlyCadence, WeeklyCadence, parse_cadence

MONTHLY_SEARCH_HORIZON = 24  # months scanned before giving up

logger = logging.getLogger(__name__)


def _is_weekday(value: int) -> bool:
    return 0 <= value <= 6


def resolve_weekly(
    anchor: datetime,
    interval: int,
    weekday: int,
    now: datetime,
) -> datetime | None:
    """First occurrence after *now* of every *interval* weeks on *weekday*.

    Occurrences are counted in whole *interval*-week blocks from the first
    *weekday* on or after the anchor's date.
    """
    if interval < 1 or not _is_weekday(weekday):
        return None

    delta = (weekday - day_of_week(anchor) + DAYS_PER_WEEK) % DAYS_PER_WEEK
    try:
        base = copy_time_of_day(add_days(start_of_day(anchor), delta), anchor)
        if base < anchor:
            base = add_weeks(base, interval)

        if base > now:
            return base

        # Jump straight to the last block boundary at or before now.
        blocks = weeks_between(base, now) // interval
        candidate = add_weeks(base, blocks * interval)
        while candidate <= now:
            candidate = add_weeks(candidate, interval)
    except (OverflowError, ValueError) as exc:
        logger.debug("Weekly occurrence out of calendar range: %s", exc)
        return None
    return candidate


def resolve_monthly(
    anchor: datetime,
    weekday: int,
    week_of_month: int,
    now: datetime,
    *,
    horizon: int = MONTHLY_SEARCH_HORIZON,
) -> datetime | None:
    """First occurrence after *now* of the *week_of_month*-th *weekday*.

    Scans at most *horizon* months starting with the month containing *now*.
    Returns None if no qualifying occurrence falls inside that window.
    """
    if not _is_weekday(weekday) or not 1 <= week_of_month <= 5:
        return None

    cursor = datetime(now.year, now.month, 1)
    try:
        for _ in range(horizon):
            day = nth_weekday_of_month(cursor.year, cursor.month, weekday, week_of_month)
            occurrence = copy_time_of_day(day, anchor)
            if occurrence >= anchor and occurrence > now:
                return occurrence
            cursor = add_months(cursor, 1)
    except (OverflowError, ValueError) as exc:
        logger.debug("Monthly occurrence out of calendar range: %s", exc)
    return None


def next_occurrence(
    cadence: WeeklyCadence | MonthlyCadence,
    anchor: datetime,
    now: datetime,
    *,
    monthly_horizon: int = MONTHLY_SEARCH_HORIZON,
) -> datetime | None:
    """Route a typed cadence to its resolver."""
    match cadence:
        case WeeklyCadence():
            return resolve_weekly(anchor, cadence.interval, cadence.weekday, now)
        case MonthlyCadence():
            return resolve_monthly(
                anchor,
                cadence.weekday,
                cadence.week_of_month,
                now,
                horizon=monthly_horizon,
            )
        case _:
            assert_never(cadence)


def resolve_next(
    cadence_raw: object,
    anchor_raw: object,
    now: datetime,
    *,
    monthly_horizon: int = MONTHLY_SEARCH_HORIZON,
) -> datetime | None:
    """Resolve the next occurrence from raw event fields.

    Returns None when the cadence is missing or malformed, when its ``type``
    is neither ``"weekly"`` nor ``"monthly"``, or when the anchor cannot be
    parsed.
    """
    cadence = parse_cadence(cadence_raw)
    if cadence is None:
        return None
    anchor = parse_instant(anchor_raw)
    if anchor is None:
        return None
    return next_occurrence(cadence, anchor, now, monthly_horizon=monthly_horizon)
