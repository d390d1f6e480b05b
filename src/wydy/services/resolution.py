"""Resolution pipeline — raw text to an ordered list of candidates.

Pipeline: PARSE → SCRIPTS → PATH EXECUTABLES → WEB/SEARCH → PLUGINS

Each resolver appends to the same list. Order is significant: it is the
menu order when several candidates survive, and the first survivor is the
implicit default.

INVARIANT: Resolvers never raise on "nothing found". An empty list is a
valid outcome.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from wydy.domain.candidate import Candidate
from wydy.domain.parser import ParseResult, parse_command
from wydy.domain.types import Keyword, Location
from wydy.domain.urls import is_url
from wydy.infrastructure.scripts import SCRIPT_MARKER, ScriptStore
from wydy.infrastructure.variables import DEFAULT_BROWSER, default_editor

if TYPE_CHECKING:
    from wydy.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

SEARCH_ENGINES: dict[str, str] = {
    "duckduckgo": "https://duckduckgo.com/?q={}",
    "google": "https://google.com/#q={}",
}
DEFAULT_SEARCH_ENGINE = "duckduckgo"


def default_search_path() -> list[Path]:
    """Directories of ``$PATH`` in order, empty entries dropped."""
    raw = os.environ.get("PATH", "")
    return [Path(p) for p in raw.split(os.pathsep) if p]


def search_engine_link(name: str, search: str) -> str:
    """Build the search URL for engine *name*.

    Unknown non-empty names fall back to duckduckgo with a warning; an
    empty name falls back silently.
    """
    template = SEARCH_ENGINES.get(name)
    if template is None:
        if name:
            logger.warning(
                "Unknown search engine %s, searching on duckduckgo by default. "
                'Run "wydy vars set search_engine <name>" to fix this.',
                name,
            )
        template = SEARCH_ENGINES[DEFAULT_SEARCH_ENGINE]
    return template.format(search)


# ── Resolvers ─────────────────────────────────────────────────────────


def script_candidates(
    commands: list[Candidate],
    parsed: ParseResult,
    scripts: ScriptStore,
    variables: Mapping[str, str],
    *,
    vars_file: Path | None = None,
) -> None:
    """Candidates for creating, editing, deleting, or running saved scripts.

    ``add`` and ``delete`` require the remainder to start with ``script``;
    ``edit`` and ``run`` do not.
    """
    keyword, content = parsed
    has_marker = content.split(" ", 1)[0].lower() == SCRIPT_MARKER
    editor = variables.get("editor") or default_editor()

    if keyword is Keyword.EDIT and vars_file is not None and content.strip().lower() == "vars":
        commands.append(
            Candidate(
                command=f"{editor} {vars_file}",
                description="edit variables",
                location=Location.CLIENT,
            )
        )
        return

    if keyword is Keyword.ADD and has_marker:
        for path in scripts.scriptify(content):
            scripts.add(commands, path, editor)
    elif keyword is Keyword.EDIT:
        for path in scripts.scriptify(content):
            scripts.edit(commands, path, editor)
    elif keyword is Keyword.DELETE and has_marker:
        for path in scripts.scriptify(content):
            scripts.delete(commands, path)
    elif keyword is Keyword.RUN:
        args = scripts.script_args(content)
        for path in scripts.scriptify(content):
            scripts.run(commands, path, args)


def find_executable(token: str, search_path: Sequence[Path]) -> str | None:
    """Case-insensitive lookup of *token* over *search_path*.

    Scan order is fixed: directories in search-path order, first directory
    wins; inside a directory entries are visited sorted by name and the first
    whose lower-cased name equals *token* wins. Returns the entry name in its
    on-disk casing.
    """
    for directory in search_path:
        try:
            names = sorted(entry.name for entry in directory.iterdir())
        except OSError:
            logger.debug("Skipping unreadable PATH entry %s", directory)
            continue
        for name in names:
            if name.lower() == token:
                logger.debug("Found command %s in %s", name, directory)
                return name
    return None


def path_candidates(
    commands: list[Candidate],
    parsed: ParseResult,
    search_path: Sequence[Path],
) -> None:
    """Candidate for an executable found on the search path."""
    keyword, content = parsed
    if keyword not in (Keyword.RUN, Keyword.NONE):
        return

    words = content.split()
    if words and words[0].lower() == "run":
        words = words[1:]
    if not words:
        return

    token = words[0].lower()
    if sys.platform == "win32" and not token.endswith(".exe"):
        token += ".exe"

    name = find_executable(token, search_path)
    if name is None:
        return

    command = " ".join([name, *words[1:]])
    commands.append(
        Candidate(command=command, description=f"execute `{command}`", location=Location.BOTH)
    )


def web_candidates(
    commands: list[Candidate],
    parsed: ParseResult,
    variables: Mapping[str, str],
) -> None:
    """Open-URL and web-search candidates."""
    keyword, search_base = parsed
    if not search_base.strip():
        return
    browser = variables.get("browser") or DEFAULT_BROWSER
    search = search_base.replace(" ", "%20")

    if keyword in (Keyword.SEARCH, Keyword.NONE, Keyword.OPEN) and is_url(search):
        commands.append(
            Candidate(
                command=f"{browser} {search}",
                description=f"opening url {search_base}",
                location=Location.BOTH,
            )
        )
    if keyword in (Keyword.SEARCH, Keyword.NONE):
        engine = variables.get("search_engine", "")
        commands.append(
            Candidate(
                command=f"{browser} {search_engine_link(engine, search)}",
                description=f"search for {search_base}",
                location=Location.BOTH,
            )
        )


# ── Pipeline ──────────────────────────────────────────────────────────


class ResolutionPipeline:
    """Turns raw user text into an ordered list of candidates.

    Parameters:
        scripts: Script store consulted by the script resolver.
        search_path: Directories scanned for executables (default: ``$PATH``).
        plugins: Optional plugin manager contributing extra candidates.
        vars_file: Path opened by ``edit vars``.
    """

    def __init__(
        self,
        scripts: ScriptStore,
        *,
        search_path: Sequence[Path] | None = None,
        plugins: PluginManager | None = None,
        vars_file: Path | None = None,
    ) -> None:
        self._scripts = scripts
        self._search_path = list(search_path) if search_path is not None else None
        self._plugins = plugins
        self._vars_file = vars_file

    @property
    def search_path(self) -> list[Path]:
        if self._search_path is None:
            return default_search_path()
        return self._search_path

    def resolve(self, text: str, variables: Mapping[str, str]) -> list[Candidate]:
        """Resolve *text* using a variables snapshot taken by the caller."""
        parsed = parse_command(text)
        logger.debug("Parse result %s", parsed)
        return self.resolve_parsed(parsed, variables)

    def resolve_parsed(
        self, parsed: ParseResult, variables: Mapping[str, str]
    ) -> list[Candidate]:
        commands: list[Candidate] = []
        script_candidates(
            commands, parsed, self._scripts, variables, vars_file=self._vars_file
        )
        path_candidates(commands, parsed, self.search_path)
        web_candidates(commands, parsed, variables)
        if self._plugins is not None:
            commands.extend(self._plugins.collect_candidates(parsed, variables))
        logger.debug("Resolved %d candidate(s) for %r", len(commands), parsed.remainder)
        return commands
