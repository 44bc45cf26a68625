"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``svcsched.plugins`` group, plus the built-in systemd plugin.
Capabilities: directory backends and run lifecycle hooks.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from svcsched.plugins.hookspecs import SvcschedHookSpec

if TYPE_CHECKING:
    from svcsched.config.models import DirectoryConfig
    from svcsched.infrastructure.directory import ServiceDirectory
    from svcsched.plugins.hookspecs import DirectoryFactory

PROJECT_NAME = "svcsched"
ENTRY_POINT_GROUP = "svcsched.plugins"

logger = logging.getLogger(__name__)


class UnknownBackendError(LookupError):
    """No plugin registered the requested directory backend."""


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SvcschedHookSpec)

    def discover_and_load(self, *, builtins: bool = True) -> list[str]:
        """Register built-in plugins, then discover entry-point plugins.

        Returns a list of loaded plugin names.
        """
        if builtins:
            from svcsched.plugins.builtins.systemd import SystemdPlugin

            self.register_plugin(SystemdPlugin(), name="systemd")
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Directory backends
    # ------------------------------------------------------------------

    def directory_backends(self) -> dict[str, DirectoryFactory]:
        """Collect backend factories from every plugin.

        Later registrations win on name clashes. A plugin returning
        something other than a dict is skipped with a warning.
        """
        backends: dict[str, DirectoryFactory] = {}
        # pluggy calls hooks LIFO; reverse so the last registered wins.
        for contributed in reversed(self._pm.hook.register_directory_backends()):
            if contributed is None:
                continue
            if not isinstance(contributed, dict):
                logger.warning("Ignoring non-dict directory backend registration")
                continue
            backends.update(contributed)
        return backends

    def create_directory(self, config: DirectoryConfig) -> ServiceDirectory:
        """Instantiate the backend named by ``config.backend``."""
        backends = self.directory_backends()
        factory = backends.get(config.backend)
        if factory is None:
            known = ", ".join(sorted(backends)) or "none"
            msg = f"Unknown directory backend '{config.backend}' (available: {known})"
            raise UnknownBackendError(msg)
        return factory(config)

    # ------------------------------------------------------------------
    # Entry-point normalization
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
