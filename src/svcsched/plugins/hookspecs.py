"""Pluggy hook specifications for svcsched.

One setup-time hook lets plugins contribute service directory backends
(e.g. a Windows Service Control Manager backend). Two lifecycle hooks
are dispatched synchronously during a run.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from svcsched.config.models import DirectoryConfig
    from svcsched.infrastructure.directory import ServiceDirectory

hookspec = pluggy.HookspecMarker("svcsched")

DirectoryFactory = Callable[["DirectoryConfig"], "ServiceDirectory"]


class SvcschedHookSpec:
    """Hook specifications for the svcsched plugin system."""

    @hookspec
    def register_directory_backends(self) -> dict[str, DirectoryFactory] | None:
        """Return backend name -> factory(DirectoryConfig) mappings."""

    @hookspec
    def post_transition(self, service_name: str, target: str, outcome: str) -> None:
        """Called after every transition attempt."""

    @hookspec
    def post_run(self, summary: dict[str, Any]) -> None:
        """Called once after all entries have been processed."""
