"""Config file discovery and per-user directories.

Lookup order for ``wydy.toml``: ``WYDY_CONFIG`` env var, walk-up from the
start directory (like git finds ``.git/``), then the user config directory.
"""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path
from typing import Any

from wydy.config.models import WydyConfig

APP_NAME = "wydy"
CONFIG_FILENAME = "wydy.toml"
CONFIG_ENV_VAR = "WYDY_CONFIG"


def user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def user_data_dir() -> Path:
    """Per-user data directory holding scripts and variables."""
    if sys.platform.startswith("win"):
        return Path(os.environ.get("LOCALAPPDATA", str(Path.home()))) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def find_config(start: Path | None = None) -> Path | None:
    """Locate ``wydy.toml``. Returns None if there is none."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    fallback = user_config_dir() / CONFIG_FILENAME
    return fallback if fallback.is_file() else None


def load_config(path: Path | None = None, cwd: Path | None = None) -> WydyConfig:
    """Load and validate config; defaults when no file is found."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return WydyConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return WydyConfig.model_validate(data)
