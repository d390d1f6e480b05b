"""Pluggy hook specifications for wydy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from wydy.domain.candidate import Candidate
    from wydy.domain.parser import ParseResult
    from wydy.domain.types import Location

hookspec = pluggy.HookspecMarker("wydy")


class WydyHookSpec:
    """Hook specifications for the wydy plugin system."""

    @hookspec
    def resolve_candidates(
        self,
        parsed: ParseResult,
        variables: Mapping[str, str],
    ) -> list[Candidate] | None:
        """Return extra candidates, appended after the built-in resolvers."""

    @hookspec
    def post_execute(
        self,
        command: str,
        description: str,
        location: Location,
        code: int,
    ) -> None:
        """Called after the daemon runs a command on its side."""
