"""Status, outcome, and error classification enums.

These enums describe what a managed service is doing, what a single
transition attempt produced, and why a schedule entry did not complete.
"""

from __future__ import annotations

from enum import StrEnum


class ServiceStatus(StrEnum):
    """Run status of a managed service as reported by the directory."""

    RUNNING = "running"
    STOPPED = "stopped"
    START_PENDING = "start_pending"
    STOP_PENDING = "stop_pending"
    UNKNOWN = "unknown"


TRANSITION_TARGETS: frozenset[ServiceStatus] = frozenset(
    {ServiceStatus.STOPPED, ServiceStatus.RUNNING}
)


class TransitionOutcome(StrEnum):
    """Result of one transition attempt."""

    COMPLETED = "completed"
    ALREADY_IN_TARGET_STATE = "already_in_target_state"
    TIMED_OUT = "timed_out"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    INVALID_CONFIG = "invalid_config"


class ErrorKind(StrEnum):
    """Why an entry was skipped or failed."""

    MISSING_NAME = "missing_name"
    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_TIME_ORDERING = "invalid_time_ordering"
    PASSED_TODAY = "passed_today"
    SERVICE_NOT_FOUND = "service_not_found"
    ACCESS_DENIED = "access_denied"
    TRANSITION_TIMEOUT = "transition_timeout"
    UNEXPECTED_FAILURE = "unexpected_failure"


class EntryStatus(StrEnum):
    """Terminal state of one schedule entry."""

    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"
