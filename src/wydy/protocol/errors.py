"""Protocol error taxonomy.

Everything under :class:`ProtocolError` is fatal to the requester process:
there is no retry and no reconnect. :class:`InvalidResponseCode` is raised
by the wire codec; the requester catches it, logs it, and abandons only the
current exchange.
"""

from __future__ import annotations


class ProtocolError(Exception):
    """Base class for protocol failures."""

    code = "PROTOCOL_ERROR"


class ConnectionUnavailable(ProtocolError):
    """The stream to the daemon could not be opened."""

    code = "CONNECTION_UNAVAILABLE"

    def __init__(self, address: str, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Daemon isn't available at {address}{detail}, run `wydy serve`")
        self.address = address


class ConnectionClosed(ProtocolError):
    """The peer closed the stream in the middle of an exchange."""

    code = "CONNECTION_CLOSED"


class HandshakeFailed(ProtocolError):
    """The peer did not echo the magic token."""

    code = "HANDSHAKE_FAILED"

    def __init__(self, received: bytes) -> None:
        super().__init__(f"Error in confirmation process: received {received!r}")
        self.received = received


class PresenceMismatch(ProtocolError):
    """The peer answered a presence check with the wrong byte."""

    code = "PRESENCE_MISMATCH"

    def __init__(self, received: int) -> None:
        super().__init__(f"Invalid presence response {received}")
        self.received = received


class MalformedField(ProtocolError):
    """A field could not be decoded (non UTF-8 text, non-numeric status)."""

    code = "MALFORMED_FIELD"


class InvalidResponseCode(ProtocolError):
    """A code byte outside the closed set expected at this step."""

    code = "INVALID_RESPONSE_CODE"

    def __init__(self, kind: str, value: int) -> None:
        super().__init__(f"Invalid {kind} byte {value}")
        self.kind = kind
        self.value = value


class SelectionCancelled(Exception):
    """The operator chose exit or typed something unusable in the menu.

    Normal termination of an exchange, not a protocol failure.
    """
