"""RunService — process every configured entry once, in order.

Stop/start entries run first, then restart entries. Each entry is fully
resolved (including its waits) before the next begins. The run has one
last-resort failure boundary; whatever happens, it reaches the completion
banner and flushes the logging sink.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from svcsched.config.logging import flush_logging
from svcsched.domain.types import EntryStatus
from svcsched.services.restart import RestartService
from svcsched.services.result import ServiceResult
from svcsched.services.stop_start import StopStartService
from svcsched.services.transition import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from svcsched.config.models import ScheduleConfig
    from svcsched.domain.specs import RestartSpec, ServiceSpec
    from svcsched.infrastructure.clock import Clock
    from svcsched.infrastructure.directory import ServiceDirectory
    from svcsched.plugins.manager import PluginManager
    from svcsched.services.result import EntryResult


class RunService:
    """The Run Controller.

    Parameters:
        directory: Backend used by both orchestrators.
        clock: Time source and suspend primitive (default: system clock).
        log: structlog logger injected into every component.
        hooks: Plugin manager for lifecycle hooks, or None.
        timeout: Per-transition confirmation timeout in seconds.
        flush: Called once at the end of every run.
    """

    op = "run"

    def __init__(
        self,
        directory: ServiceDirectory,
        *,
        clock: Clock | None = None,
        log: Any = None,
        hooks: PluginManager | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        flush: Callable[[], None] = flush_logging,
    ) -> None:
        self._log = log if log is not None else structlog.get_logger("svcsched.run")
        self._hooks = hooks
        self._flush = flush
        common: dict[str, Any] = {
            "clock": clock,
            "log": self._log,
            "hooks": hooks,
            "timeout": timeout,
        }
        self._stop_start = StopStartService(directory, **common)
        self._restart = RestartService(directory, **common)

    def run(
        self,
        service_specs: Sequence[ServiceSpec | None],
        restart_specs: Sequence[RestartSpec | None],
    ) -> ServiceResult:
        """Process both lists and return the aggregated ServiceResult."""
        return self._execute(lambda: (service_specs, restart_specs))

    def run_configured(self, loader: Callable[[], ScheduleConfig]) -> ServiceResult:
        """Like :meth:`run`, but load the schedule inside the failure boundary."""

        def _load() -> tuple[Sequence[ServiceSpec | None], Sequence[RestartSpec | None]]:
            schedule = loader()
            return schedule.services, schedule.restart_services

        return self._execute(_load)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute(
        self,
        source: Callable[[], tuple[Sequence[ServiceSpec | None], Sequence[RestartSpec | None]]],
    ) -> ServiceResult:
        entries: list[EntryResult] = []
        warnings: list[str] = []
        aborted: str | None = None

        self._log.info("run.start")
        try:
            service_specs, restart_specs = source()
            for index, spec in enumerate(service_specs):
                if spec is None:
                    self._log.warning("entry.missing", section="Services", index=index)
                    warnings.append(f"Services[{index}] is empty; skipped.")
                    continue
                entries.append(self._stop_start.run_stop_start(spec))

            for index, restart_spec in enumerate(restart_specs):
                if restart_spec is None:
                    self._log.warning("entry.missing", section="RestartServices", index=index)
                    warnings.append(f"RestartServices[{index}] is empty; skipped.")
                    continue
                entries.append(self._restart.run_restart(restart_spec))
        except Exception as exc:
            self._log.exception("run.failed", error=str(exc))
            aborted = str(exc)
            warnings.append(f"Run aborted: {exc}")

        try:
            result = self._summarize(entries, warnings, aborted)
            self._log.info(
                "run.complete",
                total=result.data["total"],
                ok=result.data["ok"],
                skipped=result.data["skipped"],
                failed=result.data["failed"],
            )
            return result
        finally:
            self._flush()

    def _summarize(
        self,
        entries: list[EntryResult],
        warnings: list[str],
        aborted: str | None,
    ) -> ServiceResult:
        counts = {status: 0 for status in EntryStatus}
        for entry in entries:
            counts[entry.status] += 1
            warnings.extend(entry.warnings)
            if not entry.ok:
                warnings.append(entry.summary())

        data: dict[str, Any] = {
            "total": len(entries),
            "ok": counts[EntryStatus.OK],
            "skipped": counts[EntryStatus.SKIPPED],
            "failed": counts[EntryStatus.FAILED],
            "entries": [entry.model_dump(mode="json") for entry in entries],
            "aborted": aborted,
        }

        if self._hooks is not None:
            try:
                self._hooks.hook.post_run(summary=data)
            except Exception:
                self._log.debug("run.post_run_failed", exc_info=True)
                warnings.append("Event dispatch failed for post_run")

        return ServiceResult(ok=True, op=self.op, data=data, warnings=warnings)
