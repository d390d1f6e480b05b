"""AppContext — shared Click context for all commands.

Created once by the root group and passed to subcommands with
``@click.pass_obj``. The workspace is built on first use so ``--help`` and
``--version`` never touch plugins or the filesystem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wydy.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from wydy.config.settings import WydySettings
    from wydy.infrastructure.workspace import Workspace
    from wydy.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: WydySettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from wydy.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from wydy.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def echo(self, message: str) -> None:
        """Operator-facing line; kept off stdout in JSON mode."""
        click.echo(message, err=self.settings.json_output)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings on stderr (JSON carries them inline).
        * Failure: stderr and exit status 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
