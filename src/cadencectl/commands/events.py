"""Command: list special (one-off) and regular (recurring) events."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import click

from cadencectl.commands._base import INSTANT, CadenceCommand

if TYPE_CHECKING:
    from cadencectl.commands._context import AppContext


@click.command(
    cls=CadenceCommand,
    examples="""\
  cadencectl events
  cadencectl events site/events/events.json
  cadencectl events --now 2024-06-15T12:00
  cadencectl events --combined
  cadencectl --json events | jq '.data.regular[].when'""",
)
@click.argument(
    "path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("--now", type=INSTANT, default=None, help="Reference instant (default: now).")
@click.option(
    "--combined",
    is_flag=True,
    help="One list: special events first, then regular events.",
)
@click.pass_obj
def events(app: AppContext, path: Path | None, now: datetime | None, combined: bool) -> None:
    """List upcoming special events and the next date of each regular event.

    PATH defaults to the [events] path from cadencectl.toml.
    """
    from cadencectl.services.schedule import ScheduleService

    svc = ScheduleService(app.settings)
    app.emit(svc.list_events(path, now=now, combined=combined))
