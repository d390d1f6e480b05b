"""Candidate — one resolved, executable interpretation of user input."""

from __future__ import annotations

from pydantic import BaseModel

from wydy.domain.types import Location


class Candidate(BaseModel):
    """A command line to execute, a human description, and where it may run.

    Attributes:
        command: Literal command line, e.g. ``vi ~/.local/share/wydy/scripts/backup.sh``.
        description: Human-facing text, e.g. ``edit script backup.sh``.
        location: Which side of the connection is allowed to run it.
    """

    model_config = {"frozen": True}

    command: str
    description: str
    location: Location = Location.BOTH

    def runs_on(self, location: Location) -> bool:
        return self.location.is_compatible(location)
