"""Command: list saved scripts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wydy.commands._base import WydyCommand

if TYPE_CHECKING:
    from wydy.commands._context import AppContext


@click.command(cls=WydyCommand)
@click.pass_obj
def scripts(app: AppContext) -> None:
    """List saved scripts (add them with `wydy ask add script NAME`)."""
    from wydy.services.scripts import ScriptsService

    app.emit(ScriptsService(app.workspace).list_scripts())
