"""Command: send a phrase to the daemon and run the chosen action."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wydy.commands._base import WydyCommand

if TYPE_CHECKING:
    from wydy.commands._context import AppContext


@click.command(
    cls=WydyCommand,
    examples="""\
  wydy ask htop
  wydy ask search rust book
  wydy ask --remote open example.com
  wydy ask edit script backup""",
)
@click.argument("words", nargs=-1, required=True)
@click.option(
    "--local/--remote",
    "locally",
    default=None,
    help="Prefer running here, or ask the daemon to run it. Default: [client] locally.",
)
@click.pass_obj
def ask(app: AppContext, words: tuple[str, ...], locally: bool | None) -> None:
    """Resolve WORDS on the daemon and execute the chosen candidate."""
    from wydy.services.ask import AskService

    text = " ".join(words)
    app.emit(AskService(app.workspace).ask(text, locally=locally, echo=app.echo))
