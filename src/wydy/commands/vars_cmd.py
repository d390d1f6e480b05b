"""Command group: persistent variables (browser, search_engine, editor)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wydy.commands._base import WydyGroup

if TYPE_CHECKING:
    from wydy.commands._context import AppContext


@click.group(
    "vars",
    cls=WydyGroup,
    examples="""\
  wydy vars list
  wydy vars set browser chromium
  wydy vars set search_engine google
  wydy vars get editor""",
)
def vars_group() -> None:
    """Inspect and change persistent variables."""


@vars_group.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show every variable."""
    from wydy.services.variables import VariablesService

    app.emit(VariablesService(app.workspace).list_vars())


@vars_group.command("get")
@click.argument("key")
@click.pass_obj
def get_cmd(app: AppContext, key: str) -> None:
    """Show one variable."""
    from wydy.services.variables import VariablesService

    app.emit(VariablesService(app.workspace).get_var(key))


@vars_group.command(
    "set",
    examples="""\
  wydy vars set browser chromium
  wydy vars set search_engine google
  wydy vars set editor nano""",
)
@click.argument("key")
@click.argument("value")
@click.pass_obj
def set_cmd(app: AppContext, key: str, value: str) -> None:
    """Set a variable."""
    from wydy.services.variables import VariablesService

    app.emit(VariablesService(app.workspace).set_var(key, value))


@vars_group.command("unset")
@click.argument("key")
@click.pass_obj
def unset_cmd(app: AppContext, key: str) -> None:
    """Remove a variable."""
    from wydy.services.variables import VariablesService

    app.emit(VariablesService(app.workspace).unset_var(key))
