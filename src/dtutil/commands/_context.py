"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the conversion service and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.output.formatters import OutputSettings, format_result
from dtutil.output.renderers import render_warnings

if TYPE_CHECKING:
    from dtutil.config.settings import DtSettings
    from dtutil.services.conversion import ConversionService
    from dtutil.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: DtSettings) -> None:
        self.settings = settings

        from dtutil.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ConversionService:
        """A conversion service bound to the current settings."""
        from dtutil.services.conversion import ConversionService

        return ConversionService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if result.warnings and not settings.json_output:
                click.echo(render_warnings(result), err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
