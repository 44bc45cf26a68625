"""Schedule entry models read from configuration.

Every field is optional at load time: a missing name or an unparseable
time is reported per entry by the orchestrators instead of rejecting the
whole configuration. Keys accept both the ``appsettings.json`` spelling
(``Name``, ``StopTime``) and snake_case.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _time_to_text(value: Any) -> Any:
    """Render TOML local-time/datetime literals back to text.

    ``StopTime = 21:30:00`` in TOML arrives as :class:`datetime.time`.
    Other scalars (``"StopTime": 930``) become their string form and fail
    to parse for that entry alone.
    """
    if isinstance(value, (dt.time, dt.datetime)):
        return value.strftime("%H:%M")
    return _scalar_to_text(value)


def _scalar_to_text(value: Any) -> Any:
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


class ServiceSpec(BaseModel):
    """A daily stop window: stop at ``stop_time``, start again at ``start_time``."""

    model_config = {"frozen": True}

    name: str | None = Field(default=None, validation_alias=AliasChoices("Name", "name"))
    stop_time: str | None = Field(
        default=None, validation_alias=AliasChoices("StopTime", "stop_time")
    )
    start_time: str | None = Field(
        default=None, validation_alias=AliasChoices("StartTime", "start_time")
    )

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("stop_time", "start_time", mode="before")
    @classmethod
    def _coerce_times(cls, value: Any) -> Any:
        return _time_to_text(value)


class RestartSpec(BaseModel):
    """A daily restart at ``restart_time``."""

    model_config = {"frozen": True}

    name: str | None = Field(default=None, validation_alias=AliasChoices("Name", "name"))
    restart_time: str | None = Field(
        default=None, validation_alias=AliasChoices("RestartTime", "restart_time")
    )

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("restart_time", mode="before")
    @classmethod
    def _coerce_times(cls, value: Any) -> Any:
        return _time_to_text(value)
