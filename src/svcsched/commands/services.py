"""Command: list services known to the directory backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcsched.commands._base import SchedCommand

if TYPE_CHECKING:
    from svcsched.commands._context import AppContext


@click.command(
    cls=SchedCommand,
    examples="""\
  svcsched services
  svcsched services ssh
  svcsched -v --json services""",
)
@click.argument("pattern", required=False)
@click.pass_obj
def services(app: AppContext, pattern: str | None) -> None:
    """List services and their status, optionally filtered by PATTERN."""
    from svcsched.services.inventory import InventoryService

    app.emit(InventoryService(app.directory).list_services(pattern))
