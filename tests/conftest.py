"""Shared pytest fixtures for wydy tests."""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from wydy.config.models import PathsConfig
from wydy.config.settings import WydySettings
from wydy.infrastructure.workspace import Workspace
from wydy.protocol.wire import Channel


@pytest.fixture(autouse=True)
def _isolated_user_dirs(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Keep every test away from the real ~/.config, ~/.local/share, and WYDY_* env."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))
    for key in list(os.environ):
        if key.startswith("WYDY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    (path / "scripts").mkdir(parents=True)
    return path


@pytest.fixture
def settings(tmp_path: Path, data_dir: Path) -> WydySettings:
    return WydySettings.from_cli(
        start_dir=tmp_path, paths=PathsConfig(data_dir=data_dir, script_suffix=".sh")
    )


@pytest.fixture
def workspace(settings: WydySettings) -> Workspace:
    """Workspace with an empty search path and no entry-point plugins."""
    return Workspace(settings, search_path=[], load_plugins=False)


@pytest.fixture
def make_channel() -> Callable[[bytes], tuple[Channel, io.BytesIO, io.BytesIO]]:
    """Build a Channel that reads scripted bytes and records what is written.

    Returns ``(channel, incoming, outgoing)``; ``outgoing.getvalue()`` is the
    exact byte sequence the code under test sent.
    """

    def _make(incoming: bytes) -> tuple[Channel, io.BytesIO, io.BytesIO]:
        reader = io.BytesIO(incoming)
        writer = io.BytesIO()
        return Channel(reader, writer), reader, writer

    return _make


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    root_level = root.level
    wydy_level = logging.getLogger("wydy").level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(root_level)
    logging.getLogger("wydy").setLevel(wydy_level)
