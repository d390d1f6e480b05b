"""Wire format: constants, closed code sets, and the byte channel.

Field layout (all on one stream, lines end with ``\\n``, text is UTF-8):

======================  ==============  =========================================
Step                    Direction       Payload
======================  ==============  =========================================
Handshake               both            4 bytes ``WYDY``, echoed verbatim
Presence check          both            1 byte ``0x01``, echoed verbatim
Command                 req -> resp     line
Location flag           req -> resp     1 byte: 2 local preferred, 1 remote
Response code           resp -> req     1 byte: 1 single, 2 multiple, 3 output
Candidate count         resp -> req     1 byte (response code 2 only)
Descriptions            resp -> req     N lines
Selection               req -> resp     1 byte: 1-based index, 255 cancel
Run location            resp -> req     1 byte: 1 requester runs, 2 responder
Local run payload       resp -> req     2 lines: command, description
Remote run payload      resp -> req     description line, then status line
======================  ==============  =========================================
"""

from __future__ import annotations

import socket
from enum import IntEnum
from typing import BinaryIO

from wydy.protocol.errors import ConnectionClosed, InvalidResponseCode, MalformedField

MAGIC = b"WYDY"
PRESENCE = 1
CANCEL = 255
MAX_CHOICES = 254


class ResponseCode(IntEnum):
    SINGLE = 1
    MULTIPLE = 2
    OUTPUT_ONLY = 3

    def encode(self) -> bytes:
        return bytes([self.value])

    @classmethod
    def decode(cls, value: int) -> ResponseCode:
        try:
            return cls(value)
        except ValueError:
            raise InvalidResponseCode("response code", value) from None


class RunLocation(IntEnum):
    """Which side executes the chosen candidate."""

    REQUESTER = 1
    RESPONDER = 2

    def encode(self) -> bytes:
        return bytes([self.value])

    @classmethod
    def decode(cls, value: int) -> RunLocation:
        try:
            return cls(value)
        except ValueError:
            raise InvalidResponseCode("run location", value) from None


class LocationFlag(IntEnum):
    """Requester preference sent right after the command line."""

    REMOTE = 1
    LOCAL = 2

    @classmethod
    def from_locally(cls, locally: bool) -> LocationFlag:
        return cls.LOCAL if locally else cls.REMOTE

    def encode(self) -> bytes:
        return bytes([self.value])

    @classmethod
    def decode(cls, value: int) -> LocationFlag:
        try:
            return cls(value)
        except ValueError:
            raise InvalidResponseCode("location flag", value) from None


class Channel:
    """Blocking byte channel over a reader/writer pair.

    A single buffered reader is shared by every step so bytes read ahead for
    one line are never lost to the next step. No timeouts: a silent peer
    blocks the caller indefinitely.
    """

    def __init__(self, reader: BinaryIO, writer: BinaryIO, *, sock: socket.socket | None = None):
        self._reader = reader
        self._writer = writer
        self._sock = sock

    @classmethod
    def from_socket(cls, sock: socket.socket) -> Channel:
        return cls(sock.makefile("rb"), sock.makefile("wb"), sock=sock)

    # -- writes ---------------------------------------------------------

    def write(self, data: bytes) -> None:
        try:
            self._writer.write(data)
            self._writer.flush()
        except OSError as exc:
            raise ConnectionClosed(f"Write failed: {exc}") from exc

    def write_byte(self, value: int) -> None:
        self.write(bytes([value]))

    def write_line(self, text: str) -> None:
        self.write(f"{text}\n".encode())

    # -- reads ----------------------------------------------------------

    def read_exact(self, size: int) -> bytes:
        try:
            data = self._reader.read(size)
        except OSError as exc:
            raise ConnectionClosed(f"Read failed: {exc}") from exc
        if data is None or len(data) != size:
            raise ConnectionClosed(f"Expected {size} byte(s), peer closed the stream")
        return data

    def read_byte(self) -> int:
        return self.read_exact(1)[0]

    def read_line(self) -> str:
        """Read one ``\\n``-terminated UTF-8 line without its terminator."""
        try:
            raw = self._reader.readline()
        except OSError as exc:
            raise ConnectionClosed(f"Read failed: {exc}") from exc
        if not raw.endswith(b"\n"):
            raise ConnectionClosed("Peer closed the stream mid-line")
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedField(f"Line is not valid UTF-8: {raw!r}") from exc
        return text.rstrip("\r\n")

    def close(self) -> None:
        for stream in (self._writer, self._reader):
            try:
                stream.close()
            except OSError:
                pass
        if self._sock is not None:
            self._sock.close()
