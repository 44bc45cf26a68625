"""Root CLI group for svcsched with global flags and command registration."""

from __future__ import annotations

import click

from svcsched import __version__
from svcsched.commands import register_commands
from svcsched.commands._base import SchedGroup
from svcsched.commands._context import AppContext
from svcsched.config.settings import SchedSettings


@click.group(
    cls=SchedGroup,
    invoke_without_command=True,
    examples="""\
  svcsched
  svcsched plan
  svcsched services
  svcsched -c ./appsettings.json run""",
)
@click.version_option(version=__version__, prog_name="svcsched")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """svcsched — daily start/stop/restart scheduling for system services.

    Without a subcommand, runs today's schedule once (same as ``run``).
    """
    settings = SchedSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from svcsched.commands.run import run

        ctx.invoke(run)


register_commands(cli)
