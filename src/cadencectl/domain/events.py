"""Event record classification: special (one-off) vs regular (recurring).

Records are loosely-typed mappings straight from the event file. A record
is recurring only when its ``recurring`` field is literally ``True``; every
other record is treated as a one-off and kept only while it is upcoming.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from cadencectl.domain.calendar import parse_instant
from cadencectl.domain.recurrence import MONTHLY_SEARCH_HORIZON, resolve_next


class EventKind(StrEnum):
    """How an event's display instant was derived."""

    RECURRING = "recurring"
    ONE_OFF = "oneoff"


@dataclass(frozen=True)
class ScheduledEvent:
    """An event record paired with the instant it is listed under."""

    kind: EventKind
    when: datetime
    record: Mapping[str, Any]

    @property
    def title(self) -> str:
        return str(self.record.get("title") or "")


@dataclass(frozen=True)
class EventListing:
    """Result of classifying an event list against a reference instant."""

    special: list[ScheduledEvent]
    regular: list[ScheduledEvent]
    dropped: list[str] = field(default_factory=list)

    def combined(self) -> list[ScheduledEvent]:
        """Special events followed by regular events."""
        return [*self.special, *self.regular]


def is_recurring(record: object) -> bool:
    return isinstance(record, Mapping) and record.get("recurring") is True


def is_upcoming_one_off(record: Mapping[str, Any], now: datetime) -> bool:
    """True if the event has not finished yet (end, or start if no end)."""
    start = parse_instant(record.get("dateStart"))
    if start is None:
        return False
    end = parse_instant(record.get("dateEnd"))
    cutoff = end or start
    return cutoff >= now


def valid_links(record: Mapping[str, Any]) -> list[dict[str, str]]:
    """Link entries that carry both an ``href`` and a ``label``."""
    links = record.get("links")
    if not isinstance(links, list):
        return []
    return [
        {"href": str(link["href"]), "label": str(link["label"])}
        for link in links
        if isinstance(link, Mapping) and link.get("href") and link.get("label")
    ]


def _describe(index: int, record: Mapping[str, Any]) -> str:
    title = record.get("title")
    return f"'{title}'" if title else f"#{index}"


def classify_events(
    records: Iterable[object],
    now: datetime,
    *,
    monthly_horizon: int = MONTHLY_SEARCH_HORIZON,
) -> EventListing:
    """Split *records* into sorted special and regular lists.

    Recurring records are listed under their next occurrence after *now* and
    dropped when none can be computed. One-off records are listed under
    their start and dropped once they have ended.
    """
    special: list[ScheduledEvent] = []
    regular: list[ScheduledEvent] = []
    dropped: list[str] = []

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            dropped.append(f"Event #{index} skipped: not an object")
            continue

        if is_recurring(record):
            nxt = resolve_next(
                record.get("cadence"),
                record.get("dateStart"),
                now,
                monthly_horizon=monthly_horizon,
            )
            if nxt is None:
                dropped.append(
                    f"Recurring event {_describe(index, record)} has no computable next occurrence"
                )
            else:
                regular.append(ScheduledEvent(EventKind.RECURRING, nxt, record))
            continue

        if is_upcoming_one_off(record, now):
            start = parse_instant(record.get("dateStart"))
            if start is not None:
                special.append(ScheduledEvent(EventKind.ONE_OFF, start, record))

    special.sort(key=lambda ev: ev.when)
    regular.sort(key=lambda ev: ev.when)
    return EventListing(special=special, regular=regular, dropped=dropped)
