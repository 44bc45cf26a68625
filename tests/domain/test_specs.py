"""Tests for ServiceSpec / RestartSpec config models."""

import datetime as dt

import pytest

from svcsched.domain.specs import RestartSpec, ServiceSpec


class TestServiceSpec:
    def test_appsettings_keys(self) -> None:
        spec = ServiceSpec.model_validate(
            {"Name": "Spooler", "StopTime": "09:05", "StartTime": "09:10"}
        )
        assert spec.name == "Spooler"
        assert spec.stop_time == "09:05"
        assert spec.start_time == "09:10"

    def test_snake_case_keys(self) -> None:
        spec = ServiceSpec(name="Spooler", stop_time="09:05", start_time="09:10")
        assert spec.stop_time == "09:05"

    def test_all_fields_optional(self) -> None:
        spec = ServiceSpec.model_validate({})
        assert spec.name is None
        assert spec.stop_time is None
        assert spec.start_time is None

    def test_toml_time_literal_becomes_text(self) -> None:
        spec = ServiceSpec.model_validate(
            {"Name": "x", "StopTime": dt.time(21, 30), "StartTime": dt.time(22, 0, 15)}
        )
        assert spec.stop_time == "21:30"
        assert spec.start_time == "22:00"

    def test_numeric_values_become_text(self) -> None:
        spec = ServiceSpec.model_validate({"Name": 42, "StopTime": 930, "StartTime": 10.5})
        assert spec.name == "42"
        assert spec.stop_time == "930"
        assert spec.start_time == "10.5"

    def test_frozen(self) -> None:
        spec = ServiceSpec(name="x")
        with pytest.raises(Exception):
            spec.name = "y"  # type: ignore[misc]


class TestRestartSpec:
    def test_appsettings_keys(self) -> None:
        spec = RestartSpec.model_validate({"Name": "Spooler", "RestartTime": "03:00"})
        assert spec.name == "Spooler"
        assert spec.restart_time == "03:00"

    def test_toml_time_literal_becomes_text(self) -> None:
        spec = RestartSpec.model_validate({"Name": "x", "RestartTime": dt.time(3, 0)})
        assert spec.restart_time == "03:00"

    def test_numeric_time_becomes_text(self) -> None:
        spec = RestartSpec.model_validate({"Name": "x", "RestartTime": 300})
        assert spec.restart_time == "300"
