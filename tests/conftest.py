"""Shared pytest fixtures and test doubles for svcsched tests."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from svcsched.domain.types import ServiceStatus
from svcsched.infrastructure.directory import ServiceAccessDenied, ServiceInfo

TODAY_9AM = dt.datetime(2026, 10, 19, 9, 0, 0)


def at(hour: int, minute: int = 0) -> dt.datetime:
    """An instant on the test day."""
    return TODAY_9AM.replace(hour=hour, minute=minute)


class FakeClock:
    """Clock whose ``sleep_until`` jumps straight to the requested instant."""

    def __init__(self, start: dt.datetime = TODAY_9AM) -> None:
        self.current = start
        self.sleeps: list[dt.datetime] = []

    def now(self) -> dt.datetime:
        return self.current

    def sleep_until(self, instant: dt.datetime) -> None:
        self.sleeps.append(instant)
        if instant > self.current:
            self.current = instant


class FakeDirectory:
    """In-memory ServiceDirectory.

    Commands flip the status immediately unless the service is listed in
    ``unconfirmed``; services in ``denied`` raise ServiceAccessDenied.
    Every issued command is recorded with the clock time it was issued at.
    """

    def __init__(
        self,
        services: dict[str, ServiceStatus] | None = None,
        *,
        clock: FakeClock | None = None,
    ) -> None:
        self.statuses: dict[str, ServiceStatus] = dict(services or {})
        self.clock = clock
        self.denied: set[str] = set()
        self.unconfirmed: set[str] = set()
        self.commands: list[tuple[str, str, dt.datetime | None]] = []
        self.waits: list[tuple[str, ServiceStatus, float]] = []

    def list_services(self) -> list[ServiceInfo]:
        return [ServiceInfo(name=n, status=s, display_name=f"{n} service") for n, s in self.statuses.items()]

    def get_status(self, name: str) -> ServiceStatus:
        return self.statuses[name]

    def issue_stop(self, name: str) -> None:
        self._command("stop", name, ServiceStatus.STOPPED)

    def issue_start(self, name: str) -> None:
        self._command("start", name, ServiceStatus.RUNNING)

    def wait_for_status(self, name: str, target: ServiceStatus, timeout: float) -> bool:
        self.waits.append((name, target, timeout))
        return self.statuses[name] == target

    def _command(self, verb: str, name: str, target: ServiceStatus) -> None:
        if name in self.denied:
            msg = f"Access denied: {verb} {name}"
            raise ServiceAccessDenied(msg, service=name)
        self.commands.append((verb, name, self.clock.now() if self.clock else None))
        if name not in self.unconfirmed:
            self.statuses[name] = target

    @property
    def verbs(self) -> list[str]:
        return [verb for verb, _name, _when in self.commands]


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None]:
    """Undo any logging configuration a test (or the CLI) installed."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("svcsched").setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def directory(clock: FakeClock) -> FakeDirectory:
    """Directory with one running and one stopped service."""
    return FakeDirectory(
        {"Spooler": ServiceStatus.RUNNING, "Backup": ServiceStatus.STOPPED},
        clock=clock,
    )


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Change CWD to an empty temp dir with no config discovery leaks.

    Log files land under ``tmp_path/logs``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SVCSCHED_CONFIG", raising=False)
    yield tmp_path


@pytest.fixture
def fake_host(
    _isolated_config: Path,
    directory: FakeDirectory,
    clock: FakeClock,
    monkeypatch: pytest.MonkeyPatch,
) -> FakeDirectory:
    """Point the CLI at the in-memory directory and clock.

    The returned directory's ``clock`` is the one the commands see.
    """
    from svcsched.commands._context import AppContext

    monkeypatch.setattr("svcsched.commands._context.SystemClock", lambda: clock)
    monkeypatch.setattr(AppContext, "_create_directory", lambda self: directory)
    return directory
