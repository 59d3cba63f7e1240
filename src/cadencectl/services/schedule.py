"""ScheduleService — event listings and single-cadence lookups.

Two operations:
- ``list_events``: load the event file, split it into special (one-off)
  and regular (recurring) events, and sort each list.
- ``next_occurrence``: resolve one cadence descriptor against an anchor.

Malformed individual records never fail an operation; they are dropped
and reported as warnings. Only file-level problems produce an error result.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cadencectl.domain.calendar import parse_instant
from cadencectl.domain.cadence import parse_cadence
from cadencectl.domain.events import (
    EventKind,
    EventListing,
    ScheduledEvent,
    classify_events,
    valid_links,
)
from cadencectl.domain.formatting import format_date_range, format_next_occurrence
from cadencectl.domain.recurrence import next_occurrence
from cadencectl.services._helpers import iso_minutes, local_now
from cadencectl.services.base import BaseService
from cadencectl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from cadencectl.config.models import DisplayConfig

logger = logging.getLogger(__name__)


def _serialize(item: ScheduledEvent, display: DisplayConfig) -> dict[str, Any]:
    """Flatten a ScheduledEvent into the payload shape the renderers expect."""
    record = item.record
    hidden: set[str] = set()
    if not display.show_location:
        hidden.add("location")
    if not display.show_schedule:
        hidden.add("schedule")
    if item.kind is EventKind.RECURRING:
        when_text = format_next_occurrence(item.when)
    else:
        when_text = format_date_range(item.when, parse_instant(record.get("dateEnd")))

    payload: dict[str, Any] = {
        "kind": str(item.kind),
        "when": iso_minutes(item.when),
        "display": when_text,
        "title": item.title,
    }
    for key in ("summary", "location", "schedule", "image"):
        value = record.get(key)
        if value and key not in hidden:
            payload[key] = str(value)
    links = valid_links(record)
    if links:
        payload["links"] = links
    return payload


class ScheduleService(BaseService):
    """Classify event files and resolve cadences."""

    def _load_records(self, path: Path) -> list[Any] | ServiceResult:
        """Read the JSON array at *path*, or return an error result."""
        op = "list_events"
        if not path.is_file():
            return self._fail(
                op, ErrorCode.NOT_FOUND, f"Event file not found: {path}", path=str(path)
            )
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return self._fail(
                op, ErrorCode.INVALID_JSON, f"Failed to parse {path}: {exc}", path=str(path)
            )
        if not isinstance(data, list):
            return self._fail(
                op,
                ErrorCode.INVALID_FORMAT,
                f"{path.name} must contain a JSON array",
                path=str(path),
                found=type(data).__name__,
            )
        logger.debug("Loaded %d event records from %s", len(data), path)
        return data

    def list_events(
        self,
        path: Path | None = None,
        *,
        now: datetime | None = None,
        combined: bool = False,
    ) -> ServiceResult:
        """List upcoming special events and the next date of each regular event.

        Args:
            path: Event file; defaults to the configured ``[events] path``.
            now: Reference instant; defaults to the local wall-clock time.
            combined: Return one list (special first, then regular) under
                ``items`` instead of separate ``special``/``regular`` lists.
        """
        path = path or self._settings.events_path
        now = now or local_now()

        loaded = self._load_records(path)
        if isinstance(loaded, ServiceResult):
            return loaded

        listing: EventListing = classify_events(
            loaded,
            now,
            monthly_horizon=self._settings.recurrence.monthly_horizon_months,
        )
        for reason in listing.dropped:
            logger.debug("Dropped event: %s", reason)

        display = self._settings.display
        data: dict[str, Any]
        if combined:
            data = {"items": [_serialize(ev, display) for ev in listing.combined()]}
        else:
            data = {
                "special": [_serialize(ev, display) for ev in listing.special],
                "regular": [_serialize(ev, display) for ev in listing.regular],
            }
        data["count"] = len(listing.special) + len(listing.regular)

        return ServiceResult(
            ok=True,
            op="list_events",
            data=data,
            warnings=listing.dropped,
            meta={"now": iso_minutes(now), "path": str(path)},
        )

    def next_occurrence(
        self,
        cadence_raw: dict[str, Any],
        anchor_raw: str,
        *,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Resolve the next occurrence of a single cadence after *now*."""
        op = "next_occurrence"
        now = now or local_now()

        anchor = parse_instant(anchor_raw)
        if anchor is None:
            return self._fail(
                op, ErrorCode.INVALID_INSTANT, f"Cannot parse anchor: {anchor_raw!r}"
            )

        cadence = parse_cadence(cadence_raw)
        if cadence is None:
            return self._fail(
                op,
                ErrorCode.UNRESOLVABLE,
                "Invalid cadence descriptor",
                cadence=cadence_raw,
            )

        nxt = next_occurrence(
            cadence,
            anchor,
            now,
            monthly_horizon=self._settings.recurrence.monthly_horizon_months,
        )
        if nxt is None:
            return self._fail(
                op,
                ErrorCode.UNRESOLVABLE,
                "No occurrence within the search horizon",
                cadence=cadence_raw,
                horizon_months=self._settings.recurrence.monthly_horizon_months,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "cadence": cadence.model_dump(by_alias=True),
                "anchor": iso_minutes(anchor),
                "next": iso_minutes(nxt),
                "display": format_date_range(nxt, None),
            },
            meta={"now": iso_minutes(now)},
        )
