"""Pydantic configuration models with code-baked defaults.

Sparse config contract: defaults baked here, the config file only contains
overrides. A minimal file holds nothing but the ``Services`` and
``RestartServices`` lists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from svcsched.domain.specs import RestartSpec, ServiceSpec


class TransitionConfig(BaseModel):
    """[transition] section."""

    model_config = {"frozen": True}

    timeout_seconds: float = Field(default=30.0, gt=0)


class DirectoryConfig(BaseModel):
    """[directory] section — which service manager backend to drive."""

    model_config = {"frozen": True}

    backend: str = "systemd"
    user: bool = False
    systemctl: str = "systemctl"
    poll_interval: float = Field(default=0.5, gt=0)


class LoggingConfig(BaseModel):
    """[logging] section — daily rolling log file."""

    model_config = {"frozen": True}

    file_enabled: bool = True
    directory: Path = Path("logs")
    file_prefix: str = "svcsched"
    backup_count: int = Field(default=31, ge=0)


class ScheduleConfig(BaseModel):
    """The ``Services`` and ``RestartServices`` lists.

    Null list items are kept so the Run Controller can report them.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    services: list[ServiceSpec | None] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Services", "services"),
    )
    restart_services: list[RestartSpec | None] = Field(
        default_factory=list,
        validation_alias=AliasChoices("RestartServices", "restart_services"),
    )

    @field_validator("services", "restart_services", mode="before")
    @classmethod
    def _absent_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value
