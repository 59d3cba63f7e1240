"""Subcommand modules for cadencectl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group.

    Imports are deferred so ``cadencectl --help`` stays fast.
    """
    from cadencectl.commands.events import events
    from cadencectl.commands.next_cmd import next_cmd

    cli.add_command(events)
    cli.add_command(next_cmd)
