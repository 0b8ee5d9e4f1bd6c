"""
Centralized configuration loader.

Loads non-sensitive config from drafting.toml (required, no fallback defaults).
Provider API keys are loaded from .env into os.environ, where logging redacts them.
"""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

_CONFIG_PATH = Path(
    os.environ.get("DRAFTING_CONFIG_PATH", Path(__file__).parent.parent / "drafting.toml")
)

if not _CONFIG_PATH.exists():
    raise RuntimeError(f"Configuration file not found: {_CONFIG_PATH}")

with open(_CONFIG_PATH, "rb") as _f:
    _CONFIG = tomllib.load(_f)


def get(*keys: str) -> Any:
    """Traverse nested TOML config by dotted keys.

    Example: get("double_check", "provider") -> "claude"
    Raises RuntimeError if any key is missing.
    """
    current = _CONFIG
    path = ".".join(keys)
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            raise RuntimeError(
                f"Missing required config key '{path}' in {_CONFIG_PATH.name}"
            )
        current = current[key]
    return current


def get_table(*keys: str) -> dict:
    """Return a copy of a nested TOML table.

    Raises RuntimeError if the key is missing or does not hold a table.
    """
    value = get(*keys)
    if not isinstance(value, dict):
        raise RuntimeError(
            f"Config key '{'.'.join(keys)}' in {_CONFIG_PATH.name} must be a table"
        )
    return copy.deepcopy(value)


def config_path() -> Path:
    """Path of the TOML file the configuration was loaded from."""
    return _CONFIG_PATH

