"""Tests for domain enums."""

from svcsched.domain.types import (
    TRANSITION_TARGETS,
    EntryStatus,
    ErrorKind,
    ServiceStatus,
    TransitionOutcome,
)


def test_only_stopped_and_running_are_targets() -> None:
    assert TRANSITION_TARGETS == {ServiceStatus.STOPPED, ServiceStatus.RUNNING}


def test_values_are_wire_strings() -> None:
    assert str(ServiceStatus.START_PENDING) == "start_pending"
    assert str(TransitionOutcome.ALREADY_IN_TARGET_STATE) == "already_in_target_state"
    assert str(EntryStatus.SKIPPED) == "skipped"
    assert f"{ErrorKind.PASSED_TODAY}" == "passed_today"


def test_error_kinds() -> None:
    assert {kind.value for kind in ErrorKind} == {
        "missing_name",
        "invalid_time_format",
        "invalid_time_ordering",
        "passed_today",
        "service_not_found",
        "access_denied",
        "transition_timeout",
        "unexpected_failure",
    }
