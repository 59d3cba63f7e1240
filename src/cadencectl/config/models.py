"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cadencectl.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from cadencectl.domain.recurrence import MONTHLY_SEARCH_HORIZON


class EventsConfig(BaseModel):
    """[events] section."""

    model_config = {"frozen": True}

    path: Path = Path("events/events.json")


class RecurrenceConfig(BaseModel):
    """[recurrence] section."""

    model_config = {"frozen": True}

    monthly_horizon_months: int = Field(default=MONTHLY_SEARCH_HORIZON, ge=1)


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    show_schedule: bool = True
    show_location: bool = True
