"""Command: whole-unit difference between two values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil diff "2023-01-01 00:00:00" "2023-01-02 00:00:00"
  dtutil diff "2023-01-01 00:00:00" "2023-01-02 00:00:00" --unit days
  dtutil -q diff "2023-01-02 00:00:00" "2023-01-01 00:00:00" --unit minutes""",
)
@click.argument("start")
@click.argument("end")
@click.option(
    "-u",
    "--unit",
    default=None,
    help="days, hours, minutes or seconds (anything else counts hours).",
)
@click.pass_obj
def diff(app: AppContext, start: str, end: str, unit: str | None) -> None:
    """Print END minus START as a whole number of units."""
    app.emit(app.service.diff(start, end, unit=unit))
