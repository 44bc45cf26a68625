"""Subcommand modules for svcsched.

Provides register_commands() which uses deferred imports to keep
``svcsched --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from svcsched.commands.plan import plan
    from svcsched.commands.run import run
    from svcsched.commands.services import services

    cli.add_command(run)
    cli.add_command(plan)
    cli.add_command(services)
