"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from svcsched.plugins.manager import PluginManager, UnknownBackendError

__all__ = ["PluginManager", "UnknownBackendError"]
