"""ServiceDirectory — the capability set every service manager backend provides.

A directory enumerates services by name, reports their run status, issues
stop/start commands, and waits (bounded) for a target status. Name
matching is the caller's job; backends report canonical names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from svcsched.domain.types import ServiceStatus


@dataclass(frozen=True)
class ServiceInfo:
    """One enumerated service."""

    name: str
    status: ServiceStatus
    display_name: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.name


class ServiceDirectoryError(Exception):
    """Base error raised by directory backends."""

    def __init__(self, message: str, *, service: str | None = None) -> None:
        super().__init__(message)
        self.service = service


class ServiceAccessDenied(ServiceDirectoryError):
    """The service manager refused the command for lack of privileges."""


class ServiceCommandError(ServiceDirectoryError):
    """The service manager failed to run a command for any other reason."""


@runtime_checkable
class ServiceDirectory(Protocol):
    """Capability set consumed by the transition executor."""

    def list_services(self) -> list[ServiceInfo]:
        """Enumerate every service the manager knows about."""
        ...

    def get_status(self, name: str) -> ServiceStatus:
        """Current status of the service with canonical *name*."""
        ...

    def issue_stop(self, name: str) -> None:
        """Ask the manager to stop *name* without waiting."""
        ...

    def issue_start(self, name: str) -> None:
        """Ask the manager to start *name* without waiting."""
        ...

    def wait_for_status(self, name: str, target: ServiceStatus, timeout: float) -> bool:
        """Block until *name* reports *target* or *timeout* seconds elapse.

        Returns False on timeout.
        """
        ...
