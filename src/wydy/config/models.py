"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``wydy.toml`` only holds overrides.
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_PORT = 9654


def _default_script_suffix() -> str:
    return ".bat" if sys.platform == "win32" else ".sh"


class ServerConfig(BaseModel):
    """[server] section — where the daemon listens and how it runs commands."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    wait_for_exit: bool = False


class ClientConfig(BaseModel):
    """[client] section."""

    model_config = {"frozen": True}

    locally: bool = True


class PathsConfig(BaseModel):
    """[paths] section. Unset paths derive from ``data_dir``."""

    model_config = {"frozen": True}

    data_dir: Path | None = None
    scripts_dir: Path | None = None
    vars_file: Path | None = None
    script_suffix: str = Field(default_factory=_default_script_suffix)


class WydyConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
