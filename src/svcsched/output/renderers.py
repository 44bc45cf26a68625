"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from svcsched.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from svcsched.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "run":
        d = result.data
        return f"OK: run ok={d.get('ok', 0)} skipped={d.get('skipped', 0)} failed={d.get('failed', 0)}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="sched.ok")
    op = Text(f"  {result.op}", style="sched.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sched.key")
    v = Text(str(value), style="sched.name" if key == "name" else "")
    console.print(Text.assemble(k, v))


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sched.error")
    op = Text(f"  {result.op}", style="sched.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the run summary: counts, then one row per entry."""
    _status_line(console, result)
    d = result.data
    for key in ("total", "ok", "skipped", "failed"):
        _field(console, key, d.get(key, 0))
    if d.get("aborted"):
        _field(console, "aborted", d["aborted"])

    entries: list[dict[str, Any]] = d.get("entries", [])
    if entries:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Service", style="sched.name", no_wrap=True)
        table.add_column("Kind")
        table.add_column("Status")
        table.add_column("Reason")
        if verbose:
            table.add_column("Transitions", style="dim")
        for entry in entries:
            row: list[str | Text] = [
                entry.get("entry") or "<unnamed>",
                str(entry.get("op", "")),
                _status_text(str(entry.get("status", ""))),
                str(entry.get("reason", "")),
            ]
            if verbose:
                row.append(
                    ", ".join(
                        f"{t['target']}={t['outcome']}" for t in entry.get("transitions", [])
                    )
                )
            table.add_row(*row)
        console.print()
        console.print(table)

    _render_warnings(console, result)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the resolved schedule as a table."""
    _status_line(console, result)
    d = result.data
    _field(console, "now", d.get("now", ""))
    _field(console, "scheduled", f"{d.get('scheduled', 0)}/{d.get('count', 0)}")

    items: list[dict[str, Any]] = d.get("items", [])
    if items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Service", style="sched.name", no_wrap=True)
        table.add_column("Kind")
        table.add_column("Stop", style="sched.time")
        table.add_column("Start", style="sched.time")
        table.add_column("State")
        for item in items:
            table.add_row(
                item.get("name") or "<unnamed>",
                str(item.get("kind", "")),
                str(item.get("stop", "")),
                str(item.get("start", "")),
                _status_text(str(item.get("state", ""))),
            )
        console.print()
        console.print(table)

    _render_warnings(console, result)


def _render_services(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the directory listing."""
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    _field(console, "count", len(items))
    if not items:
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="sched.name", no_wrap=True)
    table.add_column("Status")
    if verbose:
        table.add_column("Description", style="dim")
    for item in items:
        row: list[str | Text] = [item.get("name", ""), _status_text(str(item.get("status", "")))]
        if verbose:
            row.append(str(item.get("display_name", "")))
        table.add_row(*row)
    console.print()
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_warnings(console: Console, result: ServiceResult) -> None:
    """Run/plan warnings are part of the report, not stderr noise."""
    if not result.warnings:
        return
    console.print()
    for warning in result.warnings:
        console.print(Text("  warning: ", style="sched.warning"), warning)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "run": _render_run,
    "plan": _render_plan,
    "services": _render_services,
}
