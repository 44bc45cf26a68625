"""RestartService — restart a service once a day.

Pipeline: VALIDATE → RESOLVE → WAIT → STOP (unless already stopped) → START
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from svcsched.domain.schedule import format_instant, has_passed, parse_time_of_day, resolve
from svcsched.domain.types import ErrorKind, ServiceStatus
from svcsched.services.base import BaseService, EntryRecorder

if TYPE_CHECKING:
    import datetime as dt

    from svcsched.domain.specs import RestartSpec
    from svcsched.services.result import EntryResult


class RestartService(BaseService):
    """Runs one daily restart per RestartSpec."""

    op = "restart"

    def run_restart(self, spec: RestartSpec, now: dt.datetime | None = None) -> EntryResult:
        """Process one entry. Never raises; problems come back as the result."""
        name = (spec.name or "").strip()
        recorder = EntryRecorder(op=self.op, entry=name)
        log = self._log.bind(op=self.op, service=name)
        try:
            return self._run(spec, name, now or self._clock.now(), recorder, log)
        except Exception as exc:
            return self._guard(recorder, log, exc)

    def _run(
        self,
        spec: RestartSpec,
        name: str,
        now: dt.datetime,
        recorder: EntryRecorder,
        log: Any,
    ) -> EntryResult:
        if not name:
            log.warning("entry.missing_name")
            return recorder.skipped(ErrorKind.MISSING_NAME, "Service name is empty.")

        info = self._executor.lookup(name)
        if info is None:
            log.warning("service.not_found")
            return recorder.skipped(
                ErrorKind.SERVICE_NOT_FOUND, f"Restart service '{name}' not found."
            )

        restart_tod = parse_time_of_day(spec.restart_time)
        if restart_tod is None:
            log.warning("schedule.invalid_time", restart_time=spec.restart_time)
            return recorder.skipped(
                ErrorKind.INVALID_TIME_FORMAT,
                f"Invalid time format for restart service '{name}'.",
            )

        restart_at = resolve(now, restart_tod)
        if has_passed(restart_at, now):
            log.info("schedule.passed_today", restart_at=format_instant(restart_at))
            return recorder.skipped(
                ErrorKind.PASSED_TODAY,
                f"Restart time for '{name}' has passed today.",
            )

        log.info("schedule.resolved", restart_at=format_instant(restart_at))
        self._suspend_until(restart_at, log, action="restart")

        if self._directory.get_status(info.name) != ServiceStatus.STOPPED:
            aborted = self._stop_step(name, recorder, log)
            if aborted is not None:
                return aborted
        else:
            log.info("restart.already_stopped")

        return self._start_step(name, recorder, log)
