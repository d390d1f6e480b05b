"""Spawn resolved commands as child processes.

No sandboxing: the child runs with the current process's privileges.
"""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class SpawnFailure(Exception):
    """The named program could not be found or launched."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Cannot run {command!r}: {reason}")
        self.command = command
        self.reason = reason


def run_command(command: str, *, wait: bool = True) -> int:
    """Run *command* after splitting it on whitespace.

    Args:
        command: Command line, e.g. ``firefox https://example.com``.
        wait: Block until the child exits and return its status. When False
            the child is left running and 0 is returned once it is spawned.

    Raises:
        SpawnFailure: Empty command, unknown program, or the OS refused to spawn.
    """
    argv = command.split()
    if not argv:
        raise SpawnFailure(command, "empty command")

    logger.debug("Spawning %s (wait=%s)", argv, wait)
    try:
        proc = subprocess.Popen(argv)
    except OSError as exc:
        raise SpawnFailure(command, exc.strerror or str(exc)) from exc

    if not wait:
        return 0
    code = proc.wait()
    return code if code is not None else 0
