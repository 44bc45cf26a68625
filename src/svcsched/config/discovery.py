"""Config file discovery and loading.

Walk-up finder locates ``svcsched.toml`` (or a legacy ``appsettings.json``),
similar to how git finds .git/. Supports the SVCSCHED_CONFIG env var and
the --config CLI flag.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

from svcsched.config.models import ScheduleConfig

CONFIG_FILENAME = "svcsched.toml"
LEGACY_CONFIG_FILENAME = "appsettings.json"
CONFIG_ENV_VAR = "SVCSCHED_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``svcsched.toml`` wins over ``appsettings.json``.
    Returns the path to the config file, or None if not found.
    Checks SVCSCHED_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        for filename in (CONFIG_FILENAME, LEGACY_CONFIG_FILENAME):
            candidate = current / filename
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse a config file into a dict. JSON by ``.json`` suffix, else TOML.

    Raises ``json.JSONDecodeError`` / ``tomllib.TOMLDecodeError`` on bad syntax
    and ``ValueError`` when the document is not a table/object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(raw) if raw.strip() else {}
    else:
        data = tomllib.loads(raw)
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a table/object at the top level"
        raise ValueError(msg)
    return data


def load_schedule(path: Path | None = None, cwd: Path | None = None) -> ScheduleConfig:
    """Load and validate the schedule lists from a config file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns an empty ScheduleConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return ScheduleConfig()

    return ScheduleConfig.model_validate(read_config_data(path))
