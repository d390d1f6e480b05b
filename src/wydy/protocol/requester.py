"""Requester side of the protocol — the short-lived ``wydy ask`` process.

States: DISCONNECTED → HANDSHAKING → IDLE → PRESENCE-CHECKED → COMMAND-SENT
→ RESPONSE-DISPATCHED → (SELECTION →) SINGLE-ACTION → IDLE.

Every read blocks; any I/O failure raises a :class:`ProtocolError` and
the session is unusable afterwards.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from enum import StrEnum
from typing import Any

import click
from pydantic import BaseModel

from wydy.infrastructure.executor import run_command
from wydy.protocol.errors import (
    ConnectionClosed,
    ConnectionUnavailable,
    HandshakeFailed,
    InvalidResponseCode,
    MalformedField,
    PresenceMismatch,
    SelectionCancelled,
)
from wydy.protocol.wire import (
    CANCEL,
    MAGIC,
    PRESENCE,
    Channel,
    LocationFlag,
    ResponseCode,
    RunLocation,
)

logger = logging.getLogger(__name__)


class ExchangeStatus(StrEnum):
    EXECUTED = "executed"
    CANCELLED = "cancelled"
    OUTPUT = "output"
    INVALID = "invalid"


class ExchangeOutcome(BaseModel):
    """What the requester learned from one exchange."""

    model_config = {"frozen": True}

    status: ExchangeStatus
    code: int | None = None
    ran_on: RunLocation | None = None
    description: str = ""


def _prompt_choice() -> str:
    try:
        return click.prompt("Choice", default="", show_default=False)
    except click.Abort:
        return ""


class Requester:
    """A live protocol session.

    Parameters:
        channel: Byte channel to the daemon.
        prompt: Returns one line of operator input for the selection menu.
        echo: Prints one line to the operator.
        executor: Runs a command line locally and returns its exit code.
    """

    def __init__(
        self,
        channel: Channel,
        *,
        prompt: Callable[[], str] = _prompt_choice,
        echo: Callable[[str], Any] = click.echo,
        executor: Callable[..., int] = run_command,
    ) -> None:
        self._channel = channel
        self._prompt = prompt
        self._echo = echo
        self._executor = executor
        self.handshaken = False
        self.last_presence_ok = False

    @classmethod
    def connect(cls, host: str, port: int, **kwargs: Any) -> Requester:
        """Open the stream and handshake.

        Raises:
            ConnectionUnavailable: Nothing is listening at *host*:*port*.
            HandshakeFailed: The peer is not a wydy daemon.
        """
        address = f"{host}:{port}"
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise ConnectionUnavailable(address, str(exc)) from exc

        requester = cls(Channel.from_socket(sock), **kwargs)
        try:
            requester.handshake()
        except HandshakeFailed:
            requester.close()
            raise
        logger.debug("Connected to %s", address)
        return requester

    def __enter__(self) -> Requester:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._channel.close()

    # ------------------------------------------------------------------
    # Liveness
    # ------------------------------------------------------------------

    def handshake(self) -> None:
        """Send the magic token and require it echoed back verbatim."""
        self._channel.write(MAGIC)
        try:
            received = self._channel.read_exact(len(MAGIC))
        except ConnectionClosed as exc:
            raise HandshakeFailed(b"") from exc
        if received != MAGIC:
            raise HandshakeFailed(received)
        self.handshaken = True

    def presence_check(self) -> None:
        """Send the sentinel byte and require it echoed back."""
        self.last_presence_ok = False
        self._channel.write_byte(PRESENCE)
        try:
            received = self._channel.read_byte()
        except ConnectionClosed as exc:
            raise PresenceMismatch(-1) from exc
        if received != PRESENCE:
            raise PresenceMismatch(received)
        self.last_presence_ok = True

    # ------------------------------------------------------------------
    # Exchange
    # ------------------------------------------------------------------

    def ask(self, command: str, *, locally: bool = True) -> ExchangeOutcome:
        """Run one full exchange for *command*."""
        self.send_command(command, locally=locally)
        return self.command_response()

    def send_command(self, command: str, *, locally: bool = True) -> None:
        self.presence_check()
        self._channel.write_line(command.replace("\n", " "))
        self._channel.write(LocationFlag.from_locally(locally).encode())

    def command_response(self) -> ExchangeOutcome:
        """Read the response code and dispatch on it.

        An unknown code is logged and the exchange is abandoned without
        further reads; the connection stays open.
        """
        raw = self._channel.read_byte()
        try:
            response = ResponseCode.decode(raw)
        except InvalidResponseCode as exc:
            logger.warning("%s", exc)
            self._echo("Please, run a valid command")
            return ExchangeOutcome(status=ExchangeStatus.INVALID)

        if response is ResponseCode.SINGLE:
            return self._receive_command_process()
        if response is ResponseCode.MULTIPLE:
            return self._handle_multiple_commands()
        return ExchangeOutcome(status=ExchangeStatus.OUTPUT)

    def _handle_multiple_commands(self) -> ExchangeOutcome:
        descriptions = self._receive_descriptions()
        for index, description in enumerate(descriptions, start=1):
            self._echo(f"[{index}] {description}")
        self._echo("[_] Exit")

        try:
            choice = self._read_choice(len(descriptions))
        except SelectionCancelled as exc:
            self._channel.write_byte(CANCEL)
            self._echo(f"Exiting... {exc}".rstrip())
            return ExchangeOutcome(status=ExchangeStatus.CANCELLED)

        self._channel.write_byte(choice)
        return self._receive_command_process()

    def _receive_descriptions(self) -> list[str]:
        count = self._channel.read_byte()
        return [self._channel.read_line().strip() for _ in range(count)]

    def _read_choice(self, count: int) -> int:
        raw = self._prompt().strip()
        try:
            choice = int(raw)
        except ValueError:
            raise SelectionCancelled(f"invalid input {raw!r}") from None
        if not 1 <= choice <= count:
            raise SelectionCancelled(f"no choice {choice}")
        return choice

    def _receive_command_process(self) -> ExchangeOutcome:
        self.presence_check()
        raw = self._channel.read_byte()
        try:
            location = RunLocation.decode(raw)
        except InvalidResponseCode as exc:
            logger.warning("%s", exc)
            return ExchangeOutcome(status=ExchangeStatus.INVALID)
        logger.debug("Command location %s", location.name)

        if location is RunLocation.REQUESTER:
            command = self._channel.read_line()
            description = self._channel.read_line()
            self._echo(description)
            code = self._executor(command, wait=True)
        else:
            description = self._channel.read_line()
            self._echo(description)
            self.presence_check()
            code = self._receive_status()

        return ExchangeOutcome(
            status=ExchangeStatus.EXECUTED,
            code=code,
            ran_on=location,
            description=description,
        )

    def _receive_status(self) -> int:
        status = self._channel.read_line().strip()
        try:
            return int(status)
        except ValueError:
            raise MalformedField(f"Status code is not a number: {status!r}") from None
