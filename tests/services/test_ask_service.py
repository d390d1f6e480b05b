"""Tests for AskService with a scripted daemon."""

from __future__ import annotations

import pytest

from wydy.config.models import PathsConfig, ServerConfig
from wydy.config.settings import WydySettings
from wydy.infrastructure.executor import SpawnFailure
from wydy.infrastructure.workspace import Workspace
from wydy.protocol.errors import ConnectionUnavailable, HandshakeFailed
from wydy.protocol.requester import Requester
from wydy.services.ask import AskService


@pytest.fixture
def scripted(make_channel):
    """connect() replacement serving *incoming* bytes; records its arguments."""

    class Scripted:
        def __init__(self) -> None:
            self.incoming = b""
            self.address: tuple[str, int] | None = None
            self.outgoing = None

        def __call__(self, host: str, port: int, **options) -> Requester:
            self.address = (host, port)
            channel, _, out = make_channel(self.incoming)
            out.close = lambda: None  # keep the buffer readable after the session closes
            self.outgoing = out
            return Requester(channel, **options)

    return Scripted()


def _silent(line: str) -> None:
    pass


class TestAskService:
    def test_daemon_run(self, workspace: Workspace, scripted) -> None:
        scripted.incoming = b"\x01\x01\x01\x02" + b"execute `htop`\n" + b"\x01" + b"0\n"
        result = AskService(workspace).ask("htop", locally=False, connect=scripted, echo=_silent)
        assert result.ok
        assert result.data == {
            "input": "htop",
            "status": "executed",
            "code": 0,
            "ran_on": "responder",
            "description": "execute `htop`",
        }
        assert scripted.address == ("127.0.0.1", 9654)

    def test_client_locally_setting_is_default(
        self, workspace: Workspace, scripted
    ) -> None:
        scripted.incoming = b"\x01\x03"
        AskService(workspace).ask("x", connect=scripted, echo=_silent)
        assert scripted.outgoing.getvalue() == b"\x01x\n\x02"

    def test_server_settings_are_used(self, tmp_path, data_dir, scripted) -> None:
        settings = WydySettings.from_cli(
            start_dir=tmp_path,
            server=ServerConfig(host="10.0.0.2", port=7000),
            paths=PathsConfig(data_dir=data_dir),
        )
        scripted.incoming = b"\x01\x03"
        workspace = Workspace(settings, search_path=[], load_plugins=False)
        result = AskService(workspace).ask("x", connect=scripted, echo=_silent)
        assert scripted.address == ("10.0.0.2", 7000)
        assert result.warnings == ["Nothing to do for 'x'"]
        assert result.data["status"] == "output"

    def test_invalid_response(self, workspace: Workspace, scripted) -> None:
        scripted.incoming = b"\x01\x09"
        result = AskService(workspace).ask("x", connect=scripted, echo=_silent)
        assert result.ok
        assert result.data["status"] == "invalid"
        assert result.warnings

    def test_cancelled(self, workspace: Workspace, scripted) -> None:
        scripted.incoming = b"\x01\x02\x02a\nb\n"
        result = AskService(workspace).ask(
            "x", connect=scripted, echo=_silent, prompt=lambda: "q"
        )
        assert result.ok
        assert result.data["status"] == "cancelled"

    def test_daemon_unavailable(self, workspace: Workspace) -> None:
        def refuse(host, port, **options):
            raise ConnectionUnavailable(f"{host}:{port}", "Connection refused")

        result = AskService(workspace).ask("x", connect=refuse)
        assert not result.ok
        assert result.error.code == "CONNECTION_UNAVAILABLE"
        assert "wydy serve" in result.error.message

    def test_handshake_failure(self, workspace: Workspace) -> None:
        def wrong_peer(host, port, **options):
            raise HandshakeFailed(b"HTTP")

        result = AskService(workspace).ask("x", connect=wrong_peer)
        assert result.error.code == "HANDSHAKE_FAILED"

    def test_dropped_mid_exchange(self, workspace: Workspace, scripted) -> None:
        scripted.incoming = b"\x01\x01"
        result = AskService(workspace).ask("x", connect=scripted, echo=_silent)
        assert not result.ok
        assert result.error.code == "PRESENCE_MISMATCH"

    def test_local_spawn_failure(self, workspace: Workspace, scripted) -> None:
        def broken(command: str, *, wait: bool) -> int:
            raise SpawnFailure(command, "No such file or directory")

        scripted.incoming = b"\x01\x01\x01\x01" + b"nope --x\n" + b"execute `nope`\n"
        result = AskService(workspace).ask(
            "nope", connect=scripted, echo=_silent, executor=broken
        )
        assert not result.ok
        assert result.error.code == "SPAWN_FAILURE"
        assert result.error.detail == {"command": "nope --x"}

    def test_local_script_edit_creates_scripts_dir(self, workspace: Workspace, scripted) -> None:
        scripts_dir = workspace.settings.scripts_dir
        scripts_dir.rmdir()
        ran: list[str] = []

        def fake(command: str, *, wait: bool) -> int:
            ran.append(command)
            return 0

        command = f"vi {scripts_dir / 'new.sh'}"
        scripted.incoming = b"\x01\x01\x01\x01" + command.encode() + b"\n" + b"add script new.sh\n"
        result = AskService(workspace).ask(
            "add script new", connect=scripted, echo=_silent, executor=fake
        )
        assert result.ok
        assert result.data["ran_on"] == "requester"
        assert ran == [command]
        assert scripts_dir.is_dir()

    def test_other_local_commands_leave_scripts_dir_alone(
        self, workspace: Workspace, scripted
    ) -> None:
        scripts_dir = workspace.settings.scripts_dir
        scripts_dir.rmdir()
        scripted.incoming = b"\x01\x01\x01\x01" + b"htop\n" + b"execute `htop`\n"
        AskService(workspace).ask(
            "htop", connect=scripted, echo=_silent, executor=lambda command, *, wait: 0
        )
        assert not scripts_dir.exists()
