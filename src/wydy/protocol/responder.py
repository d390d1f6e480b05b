"""Responder side of the protocol — the long-running ``wydy serve`` daemon.

One connection is served at a time. Each exchange mirrors the requester:
PRESENCE → COMMAND + FLAG → RESPONSE CODE → (SELECTION →) SINGLE-ACTION.

INVARIANT: A protocol failure drops the current connection only; the
daemon keeps accepting new ones.
"""

from __future__ import annotations

import logging
import socketserver
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import click

from wydy.domain.types import Location
from wydy.infrastructure.executor import SpawnFailure, run_command
from wydy.protocol.errors import ConnectionClosed, PresenceMismatch, ProtocolError
from wydy.protocol.wire import (
    MAGIC,
    MAX_CHOICES,
    PRESENCE,
    Channel,
    LocationFlag,
    ResponseCode,
    RunLocation,
)

if TYPE_CHECKING:
    from wydy.domain.candidate import Candidate
    from wydy.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# Status reported to the requester when the daemon cannot spawn the command.
SPAWN_FAILURE_STATUS = 127


def filter_candidates(candidates: Sequence[Candidate], flag: LocationFlag) -> list[Candidate]:
    """Drop candidates the daemon cannot honor for this request.

    With a remote request only candidates that may run on the daemon
    survive; a local-preferred request keeps everything.
    """
    if flag is LocationFlag.LOCAL:
        return list(candidates)
    return [c for c in candidates if c.runs_on(Location.SERVER)]


def choose_run_location(candidate: Candidate, flag: LocationFlag) -> RunLocation:
    """Decide which side runs *candidate*."""
    if candidate.location is Location.CLIENT:
        return RunLocation.REQUESTER
    if candidate.location is Location.SERVER:
        return RunLocation.RESPONDER
    return RunLocation.REQUESTER if flag is LocationFlag.LOCAL else RunLocation.RESPONDER


def _one_line(text: str) -> str:
    return " ".join(text.splitlines())


class Responder:
    """Serves protocol sessions over a :class:`Channel`.

    Parameters:
        resolve: Maps raw request text to ordered candidates.
        executor: Runs a command line, ``executor(command, wait=...) -> int``.
        wait_for_exit: Block on commands run by the daemon and report their
            real exit status instead of 0 on successful spawn.
        plugins: Notified through ``post_execute`` after daemon-side runs.
    """

    def __init__(
        self,
        resolve: Callable[[str], list[Candidate]],
        *,
        executor: Callable[..., int] = run_command,
        wait_for_exit: bool = False,
        plugins: PluginManager | None = None,
    ) -> None:
        self._resolve = resolve
        self._executor = executor
        self._wait_for_exit = wait_for_exit
        self._plugins = plugins

    def handle(self, channel: Channel) -> None:
        """Serve one connection until the requester hangs up."""
        try:
            magic = channel.read_exact(len(MAGIC))
            if magic != MAGIC:
                logger.warning("Rejected connection with bad handshake %r", magic)
                return
            channel.write(MAGIC)
        except ConnectionClosed:
            logger.debug("Peer left during handshake")
            return

        while True:
            try:
                presence = channel.read_byte()
            except ConnectionClosed:
                logger.debug("Session ended")
                return
            if presence != PRESENCE:
                logger.warning("Invalid presence byte %d, dropping session", presence)
                return
            try:
                channel.write_byte(PRESENCE)
                self.exchange(channel)
            except ProtocolError as exc:
                logger.warning("Exchange aborted: %s", exc)
                return

    def exchange(self, channel: Channel) -> None:
        """Serve one request after its presence check."""
        text = channel.read_line()
        flag = LocationFlag.decode(channel.read_byte())
        try:
            resolved = self._resolve(text)
        except (click.ClickException, OSError) as exc:
            logger.warning("Cannot resolve %r: %s", text, exc)
            resolved = []
        candidates = filter_candidates(resolved, flag)
        logger.debug("Request %r (%s): %d candidate(s)", text, flag.name, len(candidates))

        if not candidates:
            channel.write(ResponseCode.OUTPUT_ONLY.encode())
            return
        if len(candidates) == 1:
            channel.write(ResponseCode.SINGLE.encode())
            self._run_exchange(channel, candidates[0], flag)
            return

        offered = candidates[:MAX_CHOICES]
        channel.write(ResponseCode.MULTIPLE.encode())
        channel.write_byte(len(offered))
        for candidate in offered:
            channel.write_line(_one_line(candidate.description))

        choice = channel.read_byte()
        if 1 <= choice <= len(offered):
            self._run_exchange(channel, offered[choice - 1], flag)
        else:
            logger.debug("Selection cancelled (%d)", choice)

    def _expect_presence(self, channel: Channel) -> None:
        received = channel.read_byte()
        if received != PRESENCE:
            raise PresenceMismatch(received)
        channel.write_byte(PRESENCE)

    def _run_exchange(self, channel: Channel, candidate: Candidate, flag: LocationFlag) -> None:
        self._expect_presence(channel)
        where = choose_run_location(candidate, flag)
        channel.write(where.encode())

        if where is RunLocation.REQUESTER:
            channel.write_line(_one_line(candidate.command))
            channel.write_line(_one_line(candidate.description))
            return

        channel.write_line(_one_line(candidate.description))
        self._expect_presence(channel)
        code = self._execute(candidate)
        channel.write_line(str(code))

    def _execute(self, candidate: Candidate) -> int:
        try:
            code = self._executor(candidate.command, wait=self._wait_for_exit)
        except SpawnFailure as exc:
            logger.warning("%s", exc)
            code = SPAWN_FAILURE_STATUS
        logger.info("Executed %r with code %d", candidate.command, code)
        if self._plugins is not None:
            self._plugins.notify_executed(
                candidate.command, candidate.description, candidate.location, code
            )
        return code


# ── TCP server ────────────────────────────────────────────────────────


class _SessionHandler(socketserver.StreamRequestHandler):
    server: ResponderServer

    def handle(self) -> None:
        logger.debug("Connection from %s", self.client_address)
        self.server.responder.handle(Channel(self.rfile, self.wfile))


class ResponderServer(socketserver.TCPServer):
    """Single-threaded TCP server: one session at a time."""

    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], responder: Responder, **kwargs: Any) -> None:
        self.responder = responder
        super().__init__(address, _SessionHandler, **kwargs)
