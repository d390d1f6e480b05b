"""Tests for the TOML-backed variable store."""

import tomllib
from pathlib import Path

import click
import pytest

from wydy.infrastructure.variables import VarStore, default_editor


class TestVarStore:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = VarStore(tmp_path / "vars.toml")
        assert store.items() == []
        assert store.value_of("browser") is None

    def test_reads_values(self, tmp_path: Path) -> None:
        path = tmp_path / "vars.toml"
        path.write_text('browser = "chromium"\nsearch_engine = "google"\n')
        store = VarStore(path)
        assert store.value_of("browser") == "chromium"
        assert store.items() == [("browser", "chromium"), ("search_engine", "google")]

    def test_non_string_values_are_coerced(self, tmp_path: Path) -> None:
        path = tmp_path / "vars.toml"
        path.write_text("port = 8080\n[nested]\nkey = 1\n")
        store = VarStore(path)
        assert store.value_of("port") == "8080"
        assert store.value_of("nested") is None

    def test_set_persists(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "vars.toml"
        VarStore(path).set("browser", 'fire"fox')
        assert tomllib.loads(path.read_text())["browser"] == 'fire"fox'
        assert VarStore(path).value_of("browser") == 'fire"fox'

    def test_set_quotes_unusual_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "vars.toml"
        VarStore(path).set("my key", "v")
        assert VarStore(path).value_of("my key") == "v"

    def test_unset(self, tmp_path: Path) -> None:
        path = tmp_path / "vars.toml"
        store = VarStore(path)
        store.set("editor", "nano")
        assert store.unset("editor") is True
        assert store.unset("editor") is False
        assert VarStore(path).value_of("editor") is None

    def test_snapshot_is_read_only_copy(self, tmp_path: Path) -> None:
        store = VarStore(tmp_path / "vars.toml")
        store.set("browser", "firefox")
        snap = store.snapshot()
        store.set("browser", "chromium")
        assert snap["browser"] == "firefox"
        with pytest.raises(TypeError):
            snap["browser"] = "x"  # type: ignore[index]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "vars.toml"
        path.write_text("browser = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            VarStore(path)


class TestDefaultEditor:
    def test_prefers_visual(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VISUAL", "code")
        monkeypatch.setenv("EDITOR", "nano")
        assert default_editor() == "code"

    def test_falls_back_to_vi(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("VISUAL", raising=False)
        monkeypatch.delenv("EDITOR", raising=False)
        assert default_editor() == "vi"
