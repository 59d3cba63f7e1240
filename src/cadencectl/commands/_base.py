"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import click

from cadencectl.domain.calendar import parse_instant


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CadenceCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CadenceGroup(click.Group):
    """Click Group whose subcommands are CadenceCommands by default."""

    command_class = CadenceCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class InstantParam(click.ParamType):
    """ISO 8601 date or date-time, converted to naive local time."""

    name = "instant"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> datetime:
        parsed = parse_instant(value)
        if parsed is None:
            self.fail(f"{value!r} is not an ISO 8601 date or date-time", param, ctx)
        return parsed


INSTANT = InstantParam()
