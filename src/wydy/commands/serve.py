"""serve — run the daemon that answers `wydy ask`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from wydy.commands._base import WydyCommand

if TYPE_CHECKING:
    from wydy.commands._context import AppContext


@click.command(
    cls=WydyCommand,
    examples="""\
  wydy serve
  wydy serve --port 9700
  wydy serve --wait""",
)
@click.option("--host", default=None, help="Bind address. Default: [server] host.")
@click.option("--port", default=None, type=int, help="Listen port. Default: [server] port.")
@click.option(
    "--wait/--no-wait",
    "wait_for_exit",
    default=None,
    help="Report real exit codes for commands run by the daemon.",
)
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None, wait_for_exit: bool | None) -> None:
    """Serve requests, one connection at a time, until interrupted."""
    from wydy.protocol.responder import Responder, ResponderServer

    cfg = app.settings.server
    host = host or cfg.host
    port = port if port is not None else cfg.port
    if wait_for_exit is None:
        wait_for_exit = cfg.wait_for_exit

    if not app.settings.verbose:
        logging.getLogger("wydy").setLevel(logging.INFO)

    workspace = app.workspace
    responder = Responder(
        workspace.resolve,
        wait_for_exit=wait_for_exit,
        plugins=workspace.plugins,
    )
    try:
        server = ResponderServer((host, port), responder)
    except OSError as exc:
        raise click.ClickException(f"Cannot listen on {host}:{port}: {exc}") from exc

    click.echo(f"wydy daemon listening on {host}:{port}", err=True)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            click.echo("Shutting down", err=True)
