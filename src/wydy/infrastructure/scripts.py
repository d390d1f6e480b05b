"""Saved user scripts: lookup by name and per-action candidate helpers.

INVARIANT: Each helper appends at most one candidate and never raises when
the action does not apply (missing file for edit/run/delete, existing file
for add).
"""

from __future__ import annotations

import logging
from pathlib import Path

from wydy.domain.candidate import Candidate
from wydy.domain.types import Location

logger = logging.getLogger(__name__)

SCRIPT_MARKER = "script"


def strip_marker(content: str) -> str:
    """Drop a leading ``script`` marker word from *content*."""
    head, _, rest = content.strip().partition(" ")
    if head.lower() == SCRIPT_MARKER:
        return rest.strip()
    return content.strip()


class ScriptStore:
    """Directory of user scripts.

    Parameters:
        scripts_dir: Directory holding the scripts (created on demand).
        default_suffix: Suffix given to newly added scripts, e.g. ``.sh``.
    """

    def __init__(self, scripts_dir: Path, *, default_suffix: str = ".sh") -> None:
        self.scripts_dir = scripts_dir
        self.default_suffix = default_suffix

    def list_scripts(self) -> list[Path]:
        if not self.scripts_dir.is_dir():
            return []
        return sorted(p for p in self.scripts_dir.iterdir() if p.is_file())

    def scriptify(self, content: str) -> list[Path]:
        """Map user text to script paths.

        The first word after an optional ``script`` marker is the script
        name. Every existing script whose stem matches it (case-insensitive)
        is returned; when none exists the single path a new script would
        get is returned instead.

        Examples:
            ``"script backup"`` -> ``[<dir>/backup.sh]``
            ``"deploy prod"``   -> ``[<dir>/deploy.py, <dir>/deploy.sh]``
        """
        words = strip_marker(content).split()
        if not words:
            return []
        name = words[0]
        target = name.lower()
        matches = [
            p for p in self.list_scripts() if p.stem.lower() == target or p.name.lower() == target
        ]
        if matches:
            return matches
        suffix = "" if Path(name).suffix else self.default_suffix
        return [self.scripts_dir / f"{name}{suffix}"]

    def ensure_dir_for(self, command: str) -> None:
        """Create the scripts directory before *command* writes a script into it."""
        if any(Path(word).parent == self.scripts_dir for word in command.split()):
            self.scripts_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def script_args(content: str) -> list[str]:
        """Words following the script name, passed through on run."""
        return strip_marker(content).split()[1:]

    # ------------------------------------------------------------------
    # Per-action helpers
    # ------------------------------------------------------------------

    def add(self, commands: list[Candidate], path: Path, editor: str) -> None:
        """Create a new script by opening its path in the editor."""
        if path.exists():
            return
        commands.append(
            Candidate(
                command=f"{editor} {path}",
                description=f"add script {path.name}",
                location=Location.CLIENT,
            )
        )

    def edit(self, commands: list[Candidate], path: Path, editor: str) -> None:
        if not path.is_file():
            return
        commands.append(
            Candidate(
                command=f"{editor} {path}",
                description=f"edit script {path.name}",
                location=Location.CLIENT,
            )
        )

    def delete(self, commands: list[Candidate], path: Path) -> None:
        if not path.is_file():
            return
        commands.append(
            Candidate(
                command=f"rm {path}",
                description=f"delete script {path.name}",
                location=Location.BOTH,
            )
        )

    def run(self, commands: list[Candidate], path: Path, args: list[str]) -> None:
        if not path.is_file():
            return
        command = " ".join([str(path), *args])
        commands.append(
            Candidate(
                command=command,
                description=f"run script {path.name}",
                location=Location.BOTH,
            )
        )
