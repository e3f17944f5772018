"""Root CLI group for dtutil with global flags and command registration."""

from __future__ import annotations

import click

from dtutil import __version__
from dtutil.commands import register_commands
from dtutil.commands._context import AppContext
from dtutil.config.settings import DtSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dtutil")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the result value.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--locale", default=None, help="Locale for names and styles, e.g. fr_FR.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    locale: str | None,
) -> None:
    """dtutil — date/time formatting, parsing, and difference utility."""
    settings = DtSettings.from_cli(
        config_path=config_path,
        locale=locale,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
