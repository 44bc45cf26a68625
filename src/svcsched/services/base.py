"""BaseService — shared plumbing for the schedule orchestrators.

Every service receives a :class:`ServiceDirectory` at construction time,
plus an injectable clock, structlog logger, and plugin manager. The
orchestrators differ only in how they order waits and transitions; the
wait, transition, and outcome-mapping steps live here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from svcsched.domain.schedule import format_instant
from svcsched.domain.types import EntryStatus, ErrorKind, ServiceStatus, TransitionOutcome
from svcsched.infrastructure.clock import SystemClock
from svcsched.services.result import EntryResult, TransitionRecord
from svcsched.services.transition import DEFAULT_TIMEOUT, TransitionExecutor

if TYPE_CHECKING:
    import datetime as dt

    from svcsched.infrastructure.clock import Clock
    from svcsched.infrastructure.directory import ServiceDirectory
    from svcsched.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# Outcome of the final start transition -> failure kind. Missing keys are ok.
_START_FAILURES: dict[TransitionOutcome, ErrorKind] = {
    TransitionOutcome.ACCESS_DENIED: ErrorKind.ACCESS_DENIED,
    TransitionOutcome.TIMED_OUT: ErrorKind.TRANSITION_TIMEOUT,
    TransitionOutcome.NOT_FOUND: ErrorKind.SERVICE_NOT_FOUND,
    TransitionOutcome.INVALID_CONFIG: ErrorKind.UNEXPECTED_FAILURE,
}


@dataclass
class EntryRecorder:
    """Accumulates transitions and warnings while an entry runs."""

    op: str
    entry: str
    transitions: list[TransitionRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def record(self, target: ServiceStatus, outcome: TransitionOutcome) -> None:
        self.transitions.append(TransitionRecord(target=target, outcome=outcome))

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def ok(self) -> EntryResult:
        return self._result(EntryStatus.OK)

    def skipped(self, kind: ErrorKind, reason: str) -> EntryResult:
        return self._result(EntryStatus.SKIPPED, kind, reason)

    def failed(self, kind: ErrorKind, reason: str) -> EntryResult:
        return self._result(EntryStatus.FAILED, kind, reason)

    def _result(
        self,
        status: EntryStatus,
        kind: ErrorKind | None = None,
        reason: str = "",
    ) -> EntryResult:
        return EntryResult(
            op=self.op,
            entry=self.entry,
            status=status,
            kind=kind,
            reason=reason,
            transitions=list(self.transitions),
            warnings=list(self.warnings),
        )


class BaseService:
    """Abstract base for schedule services.

    Usage::

        class RestartService(BaseService):
            op = "restart"

            def run_restart(self, spec, now=None) -> EntryResult:
                ...
    """

    op = "entry"

    def __init__(
        self,
        directory: ServiceDirectory,
        *,
        clock: Clock | None = None,
        log: Any = None,
        hooks: PluginManager | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._directory = directory
        self._clock: Clock = clock if clock is not None else SystemClock()
        self._log = log if log is not None else structlog.get_logger("svcsched.services")
        self._hooks = hooks
        self._timeout = timeout
        self._executor = TransitionExecutor(directory, log=self._log)

    # ------------------------------------------------------------------
    # Steps shared by the orchestrators
    # ------------------------------------------------------------------

    def _suspend_until(self, instant: dt.datetime, log: Any, *, action: str) -> None:
        """Block until *instant*; remaining delay is measured from the clock now."""
        if instant > self._clock.now():
            log.info("schedule.waiting", action=action, at=format_instant(instant))
            self._clock.sleep_until(instant)

    def _transition(
        self,
        name: str,
        target: ServiceStatus,
        recorder: EntryRecorder,
    ) -> TransitionOutcome:
        outcome = self._executor.transition(name, target, self._timeout)
        recorder.record(target, outcome)
        self._dispatch_event(
            "post_transition",
            {"service_name": name, "target": str(target), "outcome": str(outcome)},
            recorder.warnings,
        )
        return outcome

    def _stop_step(self, name: str, recorder: EntryRecorder, log: Any) -> EntryResult | None:
        """Stop *name* ahead of a start. Returns an EntryResult only to abort.

        Access denied and timeouts are best effort: the start is still tried.
        """
        outcome = self._transition(name, ServiceStatus.STOPPED, recorder)
        if outcome == TransitionOutcome.NOT_FOUND:
            return recorder.failed(ErrorKind.SERVICE_NOT_FOUND, f"Service '{name}' not found.")
        if outcome == TransitionOutcome.INVALID_CONFIG:
            return recorder.failed(ErrorKind.UNEXPECTED_FAILURE, "Invalid transition settings.")
        if outcome == TransitionOutcome.ACCESS_DENIED:
            log.warning("entry.stop_denied")
            recorder.warn(f"Access denied stopping '{name}'; start will still be attempted.")
        elif outcome == TransitionOutcome.TIMED_OUT:
            log.warning("entry.stop_unconfirmed", timeout=self._timeout)
            recorder.warn(f"Stop of '{name}' not confirmed within {self._timeout:g}s.")
        else:
            log.info("service.stopped")
        return None

    def _start_step(self, name: str, recorder: EntryRecorder, log: Any) -> EntryResult:
        """Start *name* and map the outcome to the entry's final result."""
        outcome = self._transition(name, ServiceStatus.RUNNING, recorder)
        kind = _START_FAILURES.get(outcome)
        if kind is None:
            log.info("service.started")
            return recorder.ok()
        log.warning("entry.start_failed", outcome=str(outcome))
        return recorder.failed(kind, f"Start of '{name}' ended with {outcome}.")

    def _guard(self, recorder: EntryRecorder, log: Any, exc: Exception) -> EntryResult:
        """Entry boundary: turn an unexpected exception into a failed result."""
        log.exception("entry.failed", error=str(exc))
        return recorder.failed(ErrorKind.UNEXPECTED_FAILURE, str(exc))

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event. No-op if no plugin manager was given.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._hooks is None:
            return
        try:
            getattr(self._hooks.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
