"""Tests for script lookup and per-action candidate helpers."""

from pathlib import Path

import pytest

from wydy.domain.candidate import Candidate
from wydy.domain.types import Location
from wydy.infrastructure.scripts import ScriptStore, strip_marker


@pytest.fixture
def store(tmp_path: Path) -> ScriptStore:
    scripts_dir = tmp_path / "scripts"
    scripts_dir.mkdir()
    return ScriptStore(scripts_dir, default_suffix=".sh")


def test_strip_marker() -> None:
    assert strip_marker("script backup now") == "backup now"
    assert strip_marker("Script backup") == "backup"
    assert strip_marker("backup") == "backup"
    assert strip_marker("scripts backup") == "scripts backup"


class TestScriptify:
    def test_new_script_path(self, store: ScriptStore) -> None:
        assert store.scriptify("script backup") == [store.scripts_dir / "backup.sh"]

    def test_explicit_suffix_is_kept(self, store: ScriptStore) -> None:
        assert store.scriptify("script deploy.py") == [store.scripts_dir / "deploy.py"]

    def test_existing_matches_case_insensitive_sorted(self, store: ScriptStore) -> None:
        (store.scripts_dir / "Deploy.sh").write_text("")
        (store.scripts_dir / "deploy.py").write_text("")
        (store.scripts_dir / "other.sh").write_text("")
        assert store.scriptify("deploy prod") == [
            store.scripts_dir / "Deploy.sh",
            store.scripts_dir / "deploy.py",
        ]

    def test_empty_name(self, store: ScriptStore) -> None:
        assert store.scriptify("script") == []
        assert store.scriptify("") == []

    def test_script_args(self) -> None:
        assert ScriptStore.script_args("script deploy prod --fast") == ["prod", "--fast"]
        assert ScriptStore.script_args("deploy") == []


class TestHelpers:
    def test_add_only_for_new_paths(self, store: ScriptStore) -> None:
        commands: list[Candidate] = []
        new = store.scripts_dir / "new.sh"
        store.add(commands, new, "vi")
        assert commands == [
            Candidate(command=f"vi {new}", description="add script new.sh", location=Location.CLIENT)
        ]

        existing = store.scripts_dir / "old.sh"
        existing.write_text("")
        store.add(commands, existing, "vi")
        assert len(commands) == 1

    def test_add_does_not_create_scripts_dir(self, tmp_path: Path) -> None:
        store = ScriptStore(tmp_path / "scripts", default_suffix=".sh")
        commands: list[Candidate] = []
        store.add(commands, store.scripts_dir / "new.sh", "vi")
        assert len(commands) == 1
        assert not store.scripts_dir.exists()

    def test_ensure_dir_for_script_commands_only(self, tmp_path: Path) -> None:
        store = ScriptStore(tmp_path / "scripts", default_suffix=".sh")
        store.ensure_dir_for("htop -d 5")
        assert not store.scripts_dir.exists()
        store.ensure_dir_for(f"vi {store.scripts_dir / 'new.sh'}")
        assert store.scripts_dir.is_dir()

    def test_edit_requires_existing(self, store: ScriptStore) -> None:
        commands: list[Candidate] = []
        path = store.scripts_dir / "a.sh"
        store.edit(commands, path, "nano")
        assert commands == []
        path.write_text("")
        store.edit(commands, path, "nano")
        assert commands[0].command == f"nano {path}"
        assert commands[0].location is Location.CLIENT

    def test_delete(self, store: ScriptStore) -> None:
        commands: list[Candidate] = []
        path = store.scripts_dir / "a.sh"
        path.write_text("")
        store.delete(commands, path)
        assert commands[0].command == f"rm {path}"
        assert commands[0].location is Location.BOTH

    def test_run_passes_args(self, store: ScriptStore) -> None:
        commands: list[Candidate] = []
        path = store.scripts_dir / "a.sh"
        path.write_text("")
        store.run(commands, path, ["x", "y"])
        assert commands[0].command == f"{path} x y"
        assert commands[0].description == "run script a.sh"

    def test_list_scripts(self, store: ScriptStore, tmp_path: Path) -> None:
        (store.scripts_dir / "b.sh").write_text("")
        (store.scripts_dir / "a.sh").write_text("")
        (store.scripts_dir / "dir").mkdir()
        assert [p.name for p in store.list_scripts()] == ["a.sh", "b.sh"]
        assert ScriptStore(tmp_path / "missing").list_scripts() == []
