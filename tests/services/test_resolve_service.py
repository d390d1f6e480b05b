"""Tests for ResolveService."""

from pathlib import Path

from wydy.infrastructure.workspace import Workspace
from wydy.services.resolve import ResolveService


class TestResolveService:
    def test_search_phrase(self, workspace: Workspace) -> None:
        result = ResolveService(workspace).resolve("search rust book")
        assert result.ok
        assert result.op == "resolve"
        assert result.data["keyword"] == "search"
        assert result.data["remainder"] == "rust book"
        assert result.data["count"] == 1
        item = result.data["items"][0]
        assert item["description"] == "search for rust book"
        assert item["location"] == "both"
        assert result.warnings == []

    def test_nothing_found_warns(self, workspace: Workspace) -> None:
        result = ResolveService(workspace).resolve("run ghost")
        assert result.ok
        assert result.data["count"] == 0
        assert result.warnings == ["Nothing to do for 'run ghost'"]

    def test_variables_file_is_read_per_call(self, workspace: Workspace) -> None:
        service = ResolveService(workspace)
        assert service.resolve("x").data["items"][0]["command"].startswith("firefox ")
        workspace.variables().set("browser", "chromium")
        assert service.resolve("x").data["items"][0]["command"].startswith("chromium ")

    def test_saved_script(self, workspace: Workspace, data_dir: Path) -> None:
        (data_dir / "scripts" / "backup.sh").write_text("#!/bin/sh\n")
        result = ResolveService(workspace).resolve("run backup")
        assert [i["description"] for i in result.data["items"]] == ["run script backup.sh"]
