"""Command: show how today's schedule resolves, without acting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcsched.commands._base import SchedCommand
from svcsched.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from svcsched.commands._context import AppContext


@click.command(
    cls=SchedCommand,
    examples="""\
  svcsched plan
  svcsched --json plan""",
)
@click.pass_obj
def plan(app: AppContext) -> None:
    """Resolve every entry against the current time and print the plan."""
    from svcsched.config.discovery import load_schedule
    from svcsched.services.plan import PlanService

    try:
        schedule = load_schedule(app.settings.config_path)
    except ValueError as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op="plan",
                error=ServiceError(code="INVALID_CONFIG", message=str(exc)),
            )
        )
        return
    app.emit(PlanService().plan(schedule, app.clock.now()))
