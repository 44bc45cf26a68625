"""TransitionExecutor — drive one service to Stopped or Running, confirmed.

Issues at most one command per call: a service already in the target
status is left alone. Waiting is bounded by *timeout*; an elapsed wait is
reported as ``timed_out`` and never re-issued.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from svcsched.domain.types import TRANSITION_TARGETS, ServiceStatus, TransitionOutcome
from svcsched.infrastructure.directory import ServiceAccessDenied

if TYPE_CHECKING:
    from svcsched.infrastructure.directory import ServiceDirectory, ServiceInfo

DEFAULT_TIMEOUT = 30.0


class TransitionExecutor:
    """Case-insensitive service lookup plus verified stop/start."""

    def __init__(self, directory: ServiceDirectory, *, log: Any = None) -> None:
        self._directory = directory
        self._log = log if log is not None else structlog.get_logger("svcsched.transition")

    def lookup(self, service_name: str) -> ServiceInfo | None:
        """Find a service by case-insensitive exact name."""
        wanted = service_name.strip().casefold()
        for info in self._directory.list_services():
            if info.name.casefold() == wanted:
                return info
        return None

    def transition(
        self,
        service_name: str,
        target: ServiceStatus,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> TransitionOutcome:
        """Move *service_name* to *target* and wait up to *timeout* seconds."""
        log = self._log.bind(service=service_name, target=str(target))

        if target not in TRANSITION_TARGETS or timeout <= 0:
            log.warning("transition.invalid", timeout=timeout)
            return TransitionOutcome.INVALID_CONFIG

        info = self.lookup(service_name)
        if info is None:
            log.warning("transition.not_found")
            return TransitionOutcome.NOT_FOUND

        if info.status == target:
            log.info("transition.noop", status=str(info.status))
            return TransitionOutcome.ALREADY_IN_TARGET_STATE

        log.info("transition.start", display_name=info.label, status=str(info.status))
        command = (
            self._directory.issue_stop
            if target == ServiceStatus.STOPPED
            else self._directory.issue_start
        )
        try:
            command(info.name)
            confirmed = self._directory.wait_for_status(info.name, target, timeout)
        except ServiceAccessDenied as exc:
            log.warning("transition.access_denied", error=str(exc))
            return TransitionOutcome.ACCESS_DENIED

        if not confirmed:
            log.warning("transition.timed_out", timeout=timeout)
            return TransitionOutcome.TIMED_OUT

        log.info("transition.completed")
        return TransitionOutcome.COMPLETED
