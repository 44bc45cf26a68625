"""InventoryService — list what the service directory reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from svcsched.infrastructure.directory import ServiceAccessDenied, ServiceDirectoryError
from svcsched.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from svcsched.infrastructure.directory import ServiceDirectory


class InventoryService:
    op = "services"

    def __init__(self, directory: ServiceDirectory) -> None:
        self._directory = directory

    def list_services(self, pattern: str | None = None) -> ServiceResult:
        """Enumerate services, optionally filtered by a case-insensitive substring."""
        try:
            services = self._directory.list_services()
        except ServiceDirectoryError as exc:
            code = "ACCESS_DENIED" if isinstance(exc, ServiceAccessDenied) else "DIRECTORY_ERROR"
            return ServiceResult(
                ok=False,
                op=self.op,
                error=ServiceError(code=code, message=str(exc)),
            )

        needle = (pattern or "").casefold()
        items = [
            {"name": s.name, "status": str(s.status), "display_name": s.display_name}
            for s in services
            if needle in s.name.casefold()
        ]
        return ServiceResult(ok=True, op=self.op, data={"count": len(items), "items": items})
