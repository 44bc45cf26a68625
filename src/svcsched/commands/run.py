"""Command: execute today's schedule once."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcsched.commands._base import SchedCommand

if TYPE_CHECKING:
    from svcsched.commands._context import AppContext


@click.command(
    cls=SchedCommand,
    examples="""\
  svcsched
  svcsched run
  svcsched -c /etc/svcsched/svcsched.toml run
  svcsched --json --log-json run""",
)
@click.pass_obj
def run(app: AppContext) -> None:
    """Wait for and perform today's stop/start/restart actions, then exit.

    Entry failures are logged and reported; the exit code is always 0.
    """
    from svcsched.config.discovery import load_schedule
    from svcsched.services.run import RunService

    app.configure_logging(to_file=True)
    settings = app.settings
    svc = RunService(
        app.directory,
        clock=app.clock,
        hooks=app.plugins,
        timeout=settings.transition.timeout_seconds,
    )
    app.emit(svc.run_configured(lambda: load_schedule(settings.config_path)))
