"""Tests for InventoryService."""

from svcsched.infrastructure.directory import ServiceAccessDenied, ServiceCommandError
from svcsched.services.inventory import InventoryService
from tests.conftest import FakeDirectory


class TestListServices:
    def test_all(self, directory: FakeDirectory) -> None:
        result = InventoryService(directory).list_services()
        assert result.ok
        assert result.data["count"] == 2
        assert result.data["items"][0] == {
            "name": "Spooler",
            "status": "running",
            "display_name": "Spooler service",
        }

    def test_case_insensitive_filter(self, directory: FakeDirectory) -> None:
        result = InventoryService(directory).list_services("SPOOL")
        assert [item["name"] for item in result.data["items"]] == ["Spooler"]

    def test_no_match(self, directory: FakeDirectory) -> None:
        result = InventoryService(directory).list_services("zzz")
        assert result.ok
        assert result.data["count"] == 0

    def test_access_denied(self, directory: FakeDirectory) -> None:
        def denied() -> list:
            raise ServiceAccessDenied("Access denied")

        directory.list_services = denied  # type: ignore[method-assign]
        result = InventoryService(directory).list_services()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ACCESS_DENIED"

    def test_backend_failure(self, directory: FakeDirectory) -> None:
        def broken() -> list:
            raise ServiceCommandError("Cannot run systemctl")

        directory.list_services = broken  # type: ignore[method-assign]
        result = InventoryService(directory).list_services()
        assert result.error is not None
        assert result.error.code == "DIRECTORY_ERROR"
        assert "systemctl" in result.error.message
