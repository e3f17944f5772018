"""Command: render a value with a pattern or a locale style."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand
from dtutil.domain.types import FormatStyle

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    "format",
    cls=DtCommand,
    examples="""\
  dtutil format "2023-06-15 14:30:00"
  dtutil format "2023-06-15 14:30:00" --pattern "dd/MM/yyyy"
  dtutil format "2023-06-15 14:30:00" --style long
  dtutil --locale de_DE format "2023-06-15 14:30:00" --style full""",
)
@click.argument("value")
@click.option("-p", "--pattern", default=None, help="Output pattern, e.g. 'dd MMM yyyy'.")
@click.option(
    "-s",
    "--style",
    type=click.Choice([s.value for s in FormatStyle]),
    default=None,
    help="Locale-aware date+time style.",
)
@click.pass_obj
def format_cmd(app: AppContext, value: str, pattern: str | None, style: str | None) -> None:
    """Format VALUE (given in the input pattern) as text."""
    app.emit(app.service.format(value, pattern=pattern, style=style))
