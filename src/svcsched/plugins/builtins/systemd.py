"""Built-in plugin contributing the ``systemd`` directory backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

from svcsched.infrastructure.systemd import SystemdDirectory

if TYPE_CHECKING:
    from svcsched.config.models import DirectoryConfig
    from svcsched.plugins.hookspecs import DirectoryFactory

hookimpl = pluggy.HookimplMarker("svcsched")


def _create(config: DirectoryConfig) -> SystemdDirectory:
    return SystemdDirectory(
        systemctl=config.systemctl,
        user=config.user,
        poll_interval=config.poll_interval,
    )


class SystemdPlugin:
    """Registers :class:`SystemdDirectory` under the name ``systemd``."""

    @hookimpl
    def register_directory_backends(self) -> dict[str, DirectoryFactory]:
        return {"systemd": _create}
