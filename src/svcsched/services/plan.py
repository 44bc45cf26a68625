"""PlanService — what today's run would do, without touching any service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from svcsched.domain.schedule import has_passed, parse_time_of_day, resolve
from svcsched.domain.types import ErrorKind
from svcsched.services.result import ServiceResult

if TYPE_CHECKING:
    import datetime as dt

    from svcsched.config.models import ScheduleConfig
    from svcsched.domain.specs import RestartSpec, ServiceSpec

SCHEDULED = "scheduled"


def _hhmm(instant: dt.datetime | None) -> str:
    return instant.strftime("%H:%M") if instant else ""


class PlanService:
    """Resolves every entry against *now* and reports its state."""

    op = "plan"

    def plan(self, schedule: ScheduleConfig, now: dt.datetime) -> ServiceResult:
        items: list[dict[str, Any]] = []
        warnings: list[str] = []

        for index, spec in enumerate(schedule.services):
            if spec is None:
                warnings.append(f"Services[{index}] is empty; skipped.")
                continue
            items.append(self._plan_stop_start(spec, now))

        for index, restart_spec in enumerate(schedule.restart_services):
            if restart_spec is None:
                warnings.append(f"RestartServices[{index}] is empty; skipped.")
                continue
            items.append(self._plan_restart(restart_spec, now))

        scheduled = sum(1 for item in items if item["state"] == SCHEDULED)
        return ServiceResult(
            ok=True,
            op=self.op,
            data={
                "now": now.isoformat(timespec="seconds"),
                "count": len(items),
                "scheduled": scheduled,
                "items": items,
            },
            warnings=warnings,
        )

    @staticmethod
    def _plan_stop_start(spec: ServiceSpec, now: dt.datetime) -> dict[str, Any]:
        name = (spec.name or "").strip()
        item: dict[str, Any] = {"name": name, "kind": "stop_start", "stop": "", "start": ""}
        if not name:
            return {**item, "state": str(ErrorKind.MISSING_NAME)}

        stop_tod = parse_time_of_day(spec.stop_time)
        start_tod = parse_time_of_day(spec.start_time)
        if stop_tod is None or start_tod is None:
            return {**item, "state": str(ErrorKind.INVALID_TIME_FORMAT)}

        stop_at = resolve(now, stop_tod)
        start_at = resolve(now, start_tod)
        item.update(stop=_hhmm(stop_at), start=_hhmm(start_at))
        if stop_at >= start_at:
            return {**item, "state": str(ErrorKind.INVALID_TIME_ORDERING)}
        if has_passed(stop_at, now) or has_passed(start_at, now):
            return {**item, "state": str(ErrorKind.PASSED_TODAY)}
        return {**item, "state": SCHEDULED}

    @staticmethod
    def _plan_restart(spec: RestartSpec, now: dt.datetime) -> dict[str, Any]:
        name = (spec.name or "").strip()
        item: dict[str, Any] = {"name": name, "kind": "restart", "stop": "", "start": ""}
        if not name:
            return {**item, "state": str(ErrorKind.MISSING_NAME)}

        restart_tod = parse_time_of_day(spec.restart_time)
        if restart_tod is None:
            return {**item, "state": str(ErrorKind.INVALID_TIME_FORMAT)}

        restart_at = resolve(now, restart_tod)
        item.update(stop=_hhmm(restart_at), start=_hhmm(restart_at))
        if has_passed(restart_at, now):
            return {**item, "state": str(ErrorKind.PASSED_TODAY)}
        return {**item, "state": SCHEDULED}
