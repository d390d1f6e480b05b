"""Adapt ServiceResult to the requested output mode.

* ``--json``: the full result as indented JSON
* ``--quiet``: one token per line (commands, names, keys) or ``OK: <op>``
* default: Rich rendering, dispatched on ``result.op``
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.table import Table
from rich.text import Text

from wydy.output.console import create_console, get_output, style_for_location

if TYPE_CHECKING:
    from rich.console import Console

    from wydy.services.result import ServiceResult


class OutputSettings(BaseModel):
    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _format_quiet(result)
    return render_result(result, verbose=settings.verbose)


def _format_quiet(result: ServiceResult) -> str:
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    items = result.data.get("items")
    if isinstance(items, list) and items:
        return "\n".join(_item_token(item) for item in items)
    if "code" in result.data:
        return str(result.data["code"])
    return f"OK: {result.op}"


def _item_token(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("command", "name", "key"):
            if key in item:
                return str(item[key])
    return str(item)


# ── Rich rendering ────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="wydy.ok"), Text(f"  {result.op}", style="wydy.op"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, separators=(",", ":"))
        console.print(Text(f"  {key}: ", style="wydy.key"), Text(str(value)), sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(Text("ERROR", style="wydy.error"), Text(f"  {result.op}", style="wydy.op"))
    console.print(f"  {message}", markup=False)
    if error and verbose:
        console.print(Text(f"  code: {error.code}", style="wydy.key"))
        for key, value in error.detail.items():
            console.print(Text(f"  {key}: {value}", style="wydy.key"))


def _render_candidates(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    keyword = result.data.get("keyword", "none")
    console.print(Text(f"  keyword: {keyword}  candidates: {len(items)}", style="wydy.key"))
    if not items:
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Description")
    table.add_column("Where")
    if verbose:
        table.add_column("Command", style="wydy.command")
    for index, item in enumerate(items, start=1):
        location = item.get("location", "")
        row = [
            str(index),
            item.get("description", ""),
            Text(location, style_for_location(location)),
        ]
        if verbose:
            row.append(item.get("command", ""))
        table.add_row(*row)
    console.print(table)


def _render_listing(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    where = result.data.get("directory") or result.data.get("path")
    if where:
        console.print(Text(f"  {where}", style="wydy.key"))
    for item in result.data.get("items", []):
        if "key" in item:
            console.print(f"  {item['key']} = {item['value']}", markup=False)
        else:
            console.print(f"  {item['name']}", markup=False)


def _render_ask(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    status = result.data.get("status")
    if status == "executed":
        ran_on = result.data.get("ran_on")
        line = Text(f"Command executed with code {result.data.get('code')}")
        if verbose and ran_on:
            line.append(f" ({ran_on})", style="wydy.key")
        console.print(line)
    elif status == "cancelled":
        console.print(Text("Cancelled", style="wydy.warning"))
    else:
        _status_line(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "resolve": _render_candidates,
    "list_scripts": _render_listing,
    "list_vars": _render_listing,
    "ask": _render_ask,
}
