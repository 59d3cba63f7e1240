"""Cadence descriptors — the tagged union of supported repeat rules.

Two cadence types:
- Weekly: every ``interval`` weeks on ``weekday``.
- Monthly: the ``week_of_month``-th ``weekday`` of each month.

Raw descriptors arrive as loosely-typed mappings from event data. Parsing
never raises: any malformed shape yields None so the event is simply left
out of the recurring set.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, ValidationError


class CadenceType(StrEnum):
    """Discriminant values accepted in the ``type`` field."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


def _integral(value: Any) -> Any:
    """Coerce integral floats and numeric strings to int; reject the rest."""
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not an integer")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    return value


def _default_interval(value: Any) -> Any:
    return 1 if value is None else _integral(value)


Weekday = Annotated[int, BeforeValidator(_integral), Field(ge=0, le=6)]
WeekOfMonth = Annotated[int, BeforeValidator(_integral), Field(ge=1, le=5)]
IntervalWeeks = Annotated[int, BeforeValidator(_default_interval), Field(ge=1)]


class WeeklyCadence(BaseModel):
    """Every *interval* weeks on *weekday* (0 = Sunday)."""

    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["weekly"] = "weekly"
    interval: IntervalWeeks = 1
    weekday: Weekday


class MonthlyCadence(BaseModel):
    """The *week_of_month*-th *weekday* of every month."""

    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["monthly"] = "monthly"
    weekday: Weekday
    week_of_month: WeekOfMonth = Field(alias="weekOfMonth")


Cadence = Annotated[WeeklyCadence | MonthlyCadence, Field(discriminator="type")]

_CADENCE_ADAPTER: TypeAdapter[WeeklyCadence | MonthlyCadence] = TypeAdapter(Cadence)


def parse_cadence(raw: object) -> WeeklyCadence | MonthlyCadence | None:
    """Build a typed cadence from a raw mapping, or None if it is malformed."""
    if not isinstance(raw, Mapping):
        return None
    try:
        return _CADENCE_ADAPTER.validate_python(dict(raw))
    except ValidationError:
        return None
