"""StopStartService — stop a service at one time of day, start it at another.

Pipeline: VALIDATE → RESOLVE → WAIT(stop) → STOP → WAIT(start) → START
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from svcsched.domain.schedule import format_instant, has_passed, parse_time_of_day, resolve
from svcsched.domain.types import ErrorKind
from svcsched.services.base import BaseService, EntryRecorder

if TYPE_CHECKING:
    import datetime as dt

    from svcsched.domain.specs import ServiceSpec
    from svcsched.services.result import EntryResult


class StopStartService(BaseService):
    """Runs one daily stop window per ServiceSpec."""

    op = "stop_start"

    def run_stop_start(self, spec: ServiceSpec, now: dt.datetime | None = None) -> EntryResult:
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
        spec: ServiceSpec,
        name: str,
        now: dt.datetime,
        recorder: EntryRecorder,
        log: Any,
    ) -> EntryResult:
        if not name:
            log.warning("entry.missing_name")
            return recorder.skipped(ErrorKind.MISSING_NAME, "Service name is empty.")

        if self._executor.lookup(name) is None:
            log.warning("service.not_found")
            return recorder.skipped(ErrorKind.SERVICE_NOT_FOUND, f"Service '{name}' not found.")

        stop_tod = parse_time_of_day(spec.stop_time)
        start_tod = parse_time_of_day(spec.start_time)
        if stop_tod is None or start_tod is None:
            log.warning(
                "schedule.invalid_time",
                stop_time=spec.stop_time,
                start_time=spec.start_time,
            )
            return recorder.skipped(
                ErrorKind.INVALID_TIME_FORMAT,
                f"Invalid time format for service '{name}'.",
            )

        stop_at = resolve(now, stop_tod)
        start_at = resolve(now, start_tod)

        if stop_at >= start_at:
            log.warning(
                "schedule.invalid_order",
                stop_at=format_instant(stop_at),
                start_at=format_instant(start_at),
            )
            return recorder.skipped(
                ErrorKind.INVALID_TIME_ORDERING,
                f"Stop time must be earlier than start time for service '{name}'.",
            )

        if has_passed(stop_at, now) or has_passed(start_at, now):
            log.info(
                "schedule.passed_today",
                stop_at=format_instant(stop_at),
                start_at=format_instant(start_at),
            )
            return recorder.skipped(
                ErrorKind.PASSED_TODAY,
                f"Scheduled window for '{name}' has passed today.",
            )

        log.info(
            "schedule.resolved",
            stop_at=format_instant(stop_at),
            start_at=format_instant(start_at),
        )

        self._suspend_until(stop_at, log, action="stop")
        aborted = self._stop_step(name, recorder, log)
        if aborted is not None:
            return aborted

        self._suspend_until(start_at, log, action="start")
        return self._start_step(name, recorder, log)
