"""Persistent key/value variables (preferred browser, search engine, editor).

Stored as a flat table of strings in ``vars.toml`` inside the data directory.
The resolution pipeline never reads the store directly; it receives a
read-only :meth:`VarStore.snapshot` taken once per resolution.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import click

logger = logging.getLogger(__name__)

DEFAULT_BROWSER = "firefox"

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def default_editor() -> str:
    """Editor used when the ``editor`` variable is unset."""
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"


def _render_toml(values: Mapping[str, str]) -> str:
    """Render a flat string table. JSON string escapes are valid TOML basic strings."""
    lines = ["# wydy variables"]
    for key in sorted(values):
        rendered_key = key if _BARE_KEY_RE.match(key) else json.dumps(key)
        lines.append(f"{rendered_key} = {json.dumps(values[key])}")
    return "\n".join(lines) + "\n"


class VarStore:
    """Variables backed by a TOML file.

    Non-string values found in the file are coerced with ``str()``; nested
    tables are ignored with a warning.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._values: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {self.path}: {exc}"
            raise click.ClickException(msg) from exc

        values: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                logger.warning("Ignoring table %r in %s", key, self.path)
                continue
            values[key] = value if isinstance(value, str) else str(value)
        return values

    def value_of(self, key: str) -> str | None:
        return self._values.get(key)

    def items(self) -> list[tuple[str, str]]:
        return sorted(self._values.items())

    def set(self, key: str, value: str) -> None:
        """Set *key* and persist the whole table."""
        self._values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(_render_toml(self._values), encoding="utf-8")
        logger.debug("Variable %s updated in %s", key, self.path)

    def unset(self, key: str) -> bool:
        """Remove *key*. Returns False if it was not set."""
        if key not in self._values:
            return False
        del self._values[key]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(_render_toml(self._values), encoding="utf-8")
        return True

    def snapshot(self) -> Mapping[str, str]:
        """Read-only copy of the current values."""
        return MappingProxyType(dict(self._values))
