"""Command group: resolve the next occurrence of a single cadence."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from cadencectl.commands._base import INSTANT, CadenceGroup
from cadencectl.domain.cadence import CadenceType

if TYPE_CHECKING:
    from cadencectl.commands._context import AppContext

_NEXT_EXAMPLES = """\
  cadencectl next weekly --anchor 2024-01-01T09:00 --weekday 1
  cadencectl next weekly --anchor 2024-01-01T09:00 --weekday 3 --interval 2
  cadencectl next monthly --anchor 2024-01-01T19:30 --weekday 5 --week-of-month 1
  cadencectl --json next monthly --anchor 2024-01-01 --weekday 2 --week-of-month 3 \\
      --now 2024-06-15"""

_WEEKDAY_HELP = "Target weekday, 0 = Sunday … 6 = Saturday."


@click.group(name="next", cls=CadenceGroup, examples=_NEXT_EXAMPLES)
def next_cmd() -> None:
    """Compute the next occurrence of a weekly or monthly cadence."""


@next_cmd.command(
    examples="""\
  cadencectl next weekly --anchor 2024-01-01T09:00 --weekday 1
  cadencectl next weekly --anchor 2024-01-01T09:00 --weekday 3 --interval 2 --now 2024-03-01"""
)
@click.option("--anchor", required=True, help="Event start (ISO 8601).")
@click.option("--weekday", required=True, type=int, help=_WEEKDAY_HELP)
@click.option("--interval", default=1, show_default=True, type=int, help="Repeat every N weeks.")
@click.option("--now", type=INSTANT, default=None, help="Reference instant (default: now).")
@click.pass_obj
def weekly(
    app: AppContext,
    anchor: str,
    weekday: int,
    interval: int,
    now: datetime | None,
) -> None:
    """Every N weeks on a given weekday."""
    from cadencectl.services.schedule import ScheduleService

    cadence = {"type": CadenceType.WEEKLY.value, "interval": interval, "weekday": weekday}
    app.emit(ScheduleService(app.settings).next_occurrence(cadence, anchor, now=now))


@next_cmd.command(
    examples="""\
  cadencectl next monthly --anchor 2024-01-01T19:30 --weekday 5 --week-of-month 1
  cadencectl next monthly --anchor 2024-01-01 --weekday 4 --week-of-month 5"""
)
@click.option("--anchor", required=True, help="Event start (ISO 8601).")
@click.option("--weekday", required=True, type=int, help=_WEEKDAY_HELP)
@click.option(
    "--week-of-month",
    required=True,
    type=int,
    help="Which occurrence of the weekday in the month (1-5).",
)
@click.option("--now", type=INSTANT, default=None, help="Reference instant (default: now).")
@click.pass_obj
def monthly(
    app: AppContext,
    anchor: str,
    weekday: int,
    week_of_month: int,
    now: datetime | None,
) -> None:
    """The Nth weekday of every month."""
    from cadencectl.services.schedule import ScheduleService

    cadence = {
        "type": CadenceType.MONTHLY.value,
        "weekday": weekday,
        "weekOfMonth": week_of_month,
    }
    app.emit(ScheduleService(app.settings).next_occurrence(cadence, anchor, now=now))
