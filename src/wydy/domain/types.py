"""Location and keyword enums shared by resolution and the wire protocol."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Location(IntEnum):
    """Where a candidate is allowed to run.

    The integer values are stable; they never travel on the wire directly
    but are used in logs and JSON output.
    """

    CLIENT = 1
    SERVER = 2
    BOTH = 3

    def is_compatible(self, other: Location) -> bool:
        """``BOTH`` matches anything; concrete locations only match themselves."""
        if self == other:
            return True
        return Location.BOTH in (self, other)


def compatible(a: Location, b: Location) -> bool:
    """Functional form of :meth:`Location.is_compatible`."""
    return a.is_compatible(b)


class Keyword(StrEnum):
    """Leading keywords recognized by the tokenizer."""

    SEARCH = "search"
    OPEN = "open"
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    RUN = "run"
    NONE = "none"
