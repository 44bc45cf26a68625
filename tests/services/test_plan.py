"""Tests for PlanService — today's schedule without side effects."""

from __future__ import annotations

from svcsched.config.models import ScheduleConfig
from svcsched.services.plan import PlanService
from tests.conftest import at


def _schedule(**data: object) -> ScheduleConfig:
    return ScheduleConfig.model_validate(data)


class TestPlan:
    def test_states(self) -> None:
        schedule = _schedule(
            Services=[
                {"Name": "Spooler", "StopTime": "09:05", "StartTime": "09:10"},
                {"Name": "Spooler", "StopTime": "10:00", "StartTime": "09:30"},
                {"Name": "Spooler", "StopTime": "08:00", "StartTime": "08:30"},
                {"Name": "Spooler", "StopTime": "soon", "StartTime": "09:30"},
                {"StopTime": "09:05", "StartTime": "09:10"},
            ],
            RestartServices=[
                {"Name": "Backup", "RestartTime": "9:30 PM"},
                {"Name": "Backup", "RestartTime": "03:00"},
            ],
        )
        result = PlanService().plan(schedule, at(9, 0))

        assert result.ok
        assert result.op == "plan"
        states = [item["state"] for item in result.data["items"]]
        assert states == [
            "scheduled",
            "invalid_time_ordering",
            "passed_today",
            "invalid_time_format",
            "missing_name",
            "scheduled",
            "passed_today",
        ]
        assert result.data["count"] == 7
        assert result.data["scheduled"] == 2
        assert result.data["now"] == "2026-10-19T09:00:00"

    def test_resolved_times(self) -> None:
        schedule = _schedule(
            Services=[{"Name": "Spooler", "StopTime": "9:05 am", "StartTime": "5 pm"}],
            RestartServices=[{"Name": "Backup", "RestartTime": "21:30"}],
        )
        items = PlanService().plan(schedule, at(9, 0)).data["items"]
        assert items[0] == {
            "name": "Spooler",
            "kind": "stop_start",
            "stop": "09:05",
            "start": "17:00",
            "state": "scheduled",
        }
        assert items[1]["kind"] == "restart"
        assert items[1]["stop"] == items[1]["start"] == "21:30"

    def test_null_entries_become_warnings(self) -> None:
        result = PlanService().plan(_schedule(Services=[None], RestartServices=[None]), at(9, 0))
        assert result.data["count"] == 0
        assert result.warnings == [
            "Services[0] is empty; skipped.",
            "RestartServices[0] is empty; skipped.",
        ]

    def test_empty(self) -> None:
        result = PlanService().plan(ScheduleConfig(), at(9, 0))
        assert result.data["items"] == []
        assert result.data["scheduled"] == 0
