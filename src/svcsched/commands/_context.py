"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy plugin/directory initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcsched.infrastructure.clock import SystemClock
from svcsched.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from svcsched.config.settings import SchedSettings
    from svcsched.infrastructure.clock import Clock
    from svcsched.infrastructure.directory import ServiceDirectory
    from svcsched.plugins.manager import PluginManager
    from svcsched.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The plugin manager and the directory backend are created on first use
    so ``--help`` and ``--version`` never load plugins.
    """

    def __init__(self, settings: SchedSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None
        self._directory: ServiceDirectory | None = None
        self.clock: Clock = SystemClock()

        self.configure_logging()

    def configure_logging(self, *, to_file: bool = False) -> None:
        """Route logs to stderr, plus the daily log file when *to_file* is set.

        Only ``run`` writes the file; read-only commands never create it.
        """
        from svcsched.config.logging import configure_logging

        configure_logging(
            verbose=self.settings.verbose,
            quiet=self.settings.quiet,
            log_json=self.settings.log_json,
            log_file=self.settings.logging if to_file else None,
        )

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (discovered lazily on first access)."""
        if self._plugins is None:
            from svcsched.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    @property
    def directory(self) -> ServiceDirectory:
        """The configured directory backend (created lazily)."""
        if self._directory is None:
            self._directory = self._create_directory()
        return self._directory

    def _create_directory(self) -> ServiceDirectory:
        from svcsched.plugins.manager import UnknownBackendError

        try:
            return self.plugins.create_directory(self.settings.directory)
        except UnknownBackendError as exc:
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
