"""Rich Console factory and theme for svcsched output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SCHED_THEME = Theme(
    {
        "sched.ok": "bold green",
        "sched.error": "bold red",
        "sched.warning": "bold yellow",
        "sched.op": "bold cyan",
        "sched.key": "dim",
        "sched.name": "bold blue",
        "sched.time": "magenta",
        "sched.status.ok": "green",
        "sched.status.skipped": "yellow",
        "sched.status.failed": "red",
        "sched.status.running": "green",
        "sched.status.stopped": "dim",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "ok": "sched.status.ok",
    "scheduled": "sched.status.ok",
    "skipped": "sched.status.skipped",
    "passed_today": "sched.status.skipped",
    "failed": "sched.status.failed",
    "running": "sched.status.running",
    "stopped": "sched.status.stopped",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SCHED_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an entry or service status.

    Unlisted statuses (errors like ``invalid_time_format``) render as failures.
    """
    return _STATUS_STYLES.get(status, "sched.status.failed")
