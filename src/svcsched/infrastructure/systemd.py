"""systemd backend — drives ``systemctl`` through subprocess.

Service names are unit names without the ``.service`` suffix. Commands are
issued with ``--no-block`` and ``--no-ask-password`` so the manager never
prompts; confirmation is done by polling ``ActiveState``.
"""

from __future__ import annotations

import logging
import subprocess
import time

from svcsched.domain.types import ServiceStatus
from svcsched.infrastructure.directory import (
    ServiceAccessDenied,
    ServiceCommandError,
    ServiceInfo,
)

logger = logging.getLogger(__name__)

UNIT_SUFFIX = ".service"

_ACTIVE_STATES: dict[str, ServiceStatus] = {
    "active": ServiceStatus.RUNNING,
    "reloading": ServiceStatus.RUNNING,
    "inactive": ServiceStatus.STOPPED,
    "failed": ServiceStatus.STOPPED,
    "dead": ServiceStatus.STOPPED,
    "activating": ServiceStatus.START_PENDING,
    "deactivating": ServiceStatus.STOP_PENDING,
}

_DENIED_MARKERS = (
    "access denied",
    "permission denied",
    "interactive authentication required",
    "not authorized",
)


def status_from_active_state(state: str) -> ServiceStatus:
    """Map a systemd ActiveState string to a ServiceStatus."""
    return _ACTIVE_STATES.get(state.strip().lower(), ServiceStatus.UNKNOWN)


def _unit(name: str) -> str:
    return name if name.endswith(UNIT_SUFFIX) else f"{name}{UNIT_SUFFIX}"


def _strip_suffix(unit: str) -> str:
    return unit[: -len(UNIT_SUFFIX)] if unit.endswith(UNIT_SUFFIX) else unit


class SystemdDirectory:
    """ServiceDirectory backed by ``systemctl``.

    Parameters:
        systemctl: Executable name or path.
        user: Talk to the per-user manager (``systemctl --user``).
        poll_interval: Seconds between ``ActiveState`` polls while waiting.
    """

    def __init__(
        self,
        *,
        systemctl: str = "systemctl",
        user: bool = False,
        poll_interval: float = 0.5,
    ) -> None:
        self._systemctl = systemctl
        self._user = user
        self._poll_interval = poll_interval

    # ------------------------------------------------------------------
    # ServiceDirectory
    # ------------------------------------------------------------------

    def list_services(self) -> list[ServiceInfo]:
        """Loaded units (with live state) merged with installed unit files."""
        services: dict[str, ServiceInfo] = {}

        listing = self._run("list-units", "--type=service", "--all", "--plain", "--no-legend")
        for line in listing.stdout.splitlines():
            parts = line.lstrip("●* ").split(None, 4)
            if len(parts) < 4 or not parts[0].endswith(UNIT_SUFFIX):
                continue
            unit, load, active = parts[0], parts[1], parts[2]
            # Referenced by another unit but not installed.
            if load == "not-found":
                continue
            description = parts[4] if len(parts) > 4 else ""
            name = _strip_suffix(unit)
            services[name] = ServiceInfo(
                name=name,
                status=status_from_active_state(active),
                display_name=description,
            )

        files = self._run("list-unit-files", "--type=service", "--no-legend")
        for line in files.stdout.splitlines():
            parts = line.split()
            if not parts or not parts[0].endswith(UNIT_SUFFIX):
                continue
            name = _strip_suffix(parts[0])
            state = parts[1] if len(parts) > 1 else ""
            # Template units ("getty@") cannot be started by bare name.
            if name.endswith("@") or state == "masked" or name in services:
                continue
            services[name] = ServiceInfo(name=name, status=ServiceStatus.STOPPED)

        return sorted(services.values(), key=lambda s: s.name.lower())

    def get_status(self, name: str) -> ServiceStatus:
        result = self._run("show", "--property=ActiveState", "--value", _unit(name), service=name)
        return status_from_active_state(result.stdout)

    def issue_stop(self, name: str) -> None:
        logger.debug("systemctl stop %s", name)
        self._run("stop", "--no-block", _unit(name), service=name)

    def issue_start(self, name: str) -> None:
        logger.debug("systemctl start %s", name)
        self._run("start", "--no-block", _unit(name), service=name)

    def wait_for_status(self, name: str, target: ServiceStatus, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while True:
            if self.get_status(name) == target:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(self._poll_interval, remaining))

    # ------------------------------------------------------------------
    # subprocess helpers
    # ------------------------------------------------------------------

    def _command(self, *args: str) -> list[str]:
        cmd = [self._systemctl]
        if self._user:
            cmd.append("--user")
        cmd.extend(["--no-pager", "--no-ask-password", *args])
        return cmd

    def _run(self, *args: str, service: str | None = None) -> subprocess.CompletedProcess[str]:
        """Run a systemctl command. Raises a ServiceDirectoryError on failure."""
        cmd = self._command(*args)
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
            )
        except OSError as exc:
            msg = f"Cannot run {self._systemctl}: {exc}"
            raise ServiceCommandError(msg, service=service) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            if any(marker in stderr.lower() for marker in _DENIED_MARKERS):
                raise ServiceAccessDenied(stderr, service=service) from exc
            msg = stderr or f"{' '.join(cmd)} exited with status {exc.returncode}"
            raise ServiceCommandError(msg, service=service) from exc
