"""Unified settings — CLI flags, env vars, and the config file in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SVCSCHED_*`` prefix
  3. Config file  — ``svcsched.toml`` / ``appsettings.json`` via walk-up
  4. Code defaults — baked into the section models

The schedule lists (``Services``, ``RestartServices``) are deliberately not
part of the settings object: they are loaded inside the run's failure
boundary by :func:`svcsched.config.discovery.load_schedule`, so a malformed
section is logged instead of aborting start-up.
"""

from __future__ import annotations

import json
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from svcsched.config.discovery import find_config, read_config_data
from svcsched.config.models import DirectoryConfig, LoggingConfig, TransitionConfig


class FileSettingsSource(PydanticBaseSettingsSource):
    """Read settings sections from the discovered config file."""

    def __init__(self, settings_cls: type[BaseSettings], config_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if config_path and config_path.is_file():
            try:
                self._data = read_config_data(config_path)
            except (tomllib.TOMLDecodeError, json.JSONDecodeError, ValueError) as exc:
                msg = f"Invalid config file {config_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full file data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for the config path during construction.
_tls = threading.local()


class SchedSettings(BaseSettings):
    """Unified settings for the svcsched CLI.

    Merges CLI flags, environment variables, config file sections, and
    code-baked defaults into a single frozen object.  Stored on the
    :class:`~svcsched.commands._context.AppContext` at the CLI root.

    Attributes:
        config_path: The config file in use, or None when none was found.
    """

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "env_prefix": "SVCSCHED_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Config file sections ---
    transition: TransitionConfig = Field(default_factory=TransitionConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the config file source between env vars and defaults."""
        config_path = getattr(_tls, "config_path", None)
        return (
            init_settings,
            env_settings,
            FileSettingsSource(settings_cls, config_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> SchedSettings:
        """Construct settings from a CLI invocation.

        Discovers the config file via walk-up from *cwd* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        resolved: Path | None
        if config_path:
            resolved = Path(config_path)
            if not resolved.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            resolved = find_config(cwd)

        _tls.config_path = resolved
        try:
            return cls(config_path=resolved, **cli_flags)
        except ValidationError as exc:
            msg = f"Invalid settings in {resolved or 'environment'}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.config_path = None
