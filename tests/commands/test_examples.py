"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from wydy.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["ask", "--examples"], ["wydy ask htop", "wydy ask --remote open example.com"]),
    (["resolve", "--examples"], ["wydy resolve search rust book"]),
    (["serve", "--examples"], ["wydy serve --port 9700"]),
    (["vars", "--examples"], ["wydy vars list"]),
    (["vars", "set", "--examples"], ["wydy vars set browser chromium"]),
]


@pytest.mark.parametrize(("args", "expected"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], expected: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in expected:
        assert keyword in result.output


def test_examples_listed_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["ask", "--help"])
    assert "--examples" in result.output


def test_no_examples_flag_without_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["scripts", "--examples"])
    assert result.exit_code == 2
