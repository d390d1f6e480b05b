"""Subcommand modules for wydy.

register_commands() imports lazily so ``wydy --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``vars`` group and the standalone commands on the root group."""
    from wydy.commands.vars_cmd import vars_group

    cli.add_command(vars_group)

    from wydy.commands.ask import ask
    from wydy.commands.resolve import resolve
    from wydy.commands.scripts import scripts
    from wydy.commands.serve import serve

    cli.add_command(ask)
    cli.add_command(serve)
    cli.add_command(resolve)
    cli.add_command(scripts)
