"""Result types — ServiceResult for operations, EntryResult for schedule entries.

INVARIANT: Orchestrators never raise for a bad entry. They return an
EntryResult whose ``status`` says whether the entry ran, was skipped,
or failed, and the Run Controller aggregates them into a ServiceResult.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from svcsched.domain.types import EntryStatus, ErrorKind, ServiceStatus, TransitionOutcome


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for CLI-facing operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"run"``, ``"plan"``, ``"services"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


class TransitionRecord(BaseModel):
    """One transition issued on behalf of an entry."""

    model_config = {"frozen": True}

    target: ServiceStatus
    outcome: TransitionOutcome


class EntryResult(BaseModel):
    """Outcome of one schedule entry: Ok | Skipped(reason) | Failed(kind).

    Attributes:
        op: ``"stop_start"`` or ``"restart"``.
        entry: Configured service name (may be empty for a nameless entry).
        status: ok, skipped, or failed.
        kind: Error taxonomy member when status is not ok.
        reason: Human-readable explanation for skipped/failed entries.
        transitions: Transitions issued, in order.
        warnings: Non-fatal issues (e.g. access denied on the stop step).
    """

    model_config = {"frozen": True}

    op: str
    entry: str = ""
    status: EntryStatus
    kind: ErrorKind | None = None
    reason: str = ""
    transitions: list[TransitionRecord] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == EntryStatus.OK

    def summary(self) -> str:
        """One-line description used for run warnings."""
        label = self.entry or "<unnamed>"
        if self.ok:
            return f"{self.op} {label}: ok"
        return f"{self.op} {label}: {self.status} ({self.kind}) {self.reason}".rstrip()
