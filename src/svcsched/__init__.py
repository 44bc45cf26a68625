"""svcsched — daily start/stop/restart scheduling for OS-managed services."""

__version__ = "0.1.0"
