"""Command: list the candidates a phrase resolves to, without running anything."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wydy.commands._base import WydyCommand

if TYPE_CHECKING:
    from wydy.commands._context import AppContext


@click.command(
    cls=WydyCommand,
    examples="""\
  wydy resolve search rust book
  wydy -v resolve run backup
  wydy --json resolve open example.com""",
)
@click.argument("words", nargs=-1, required=True)
@click.pass_obj
def resolve(app: AppContext, words: tuple[str, ...]) -> None:
    """Show the ordered candidates for WORDS (use -v to include command lines)."""
    from wydy.services.resolve import ResolveService

    app.emit(ResolveService(app.workspace).resolve(" ".join(words)))
