"""Command: join a date and a time into one value."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil compose 2023-06-15 14:30:00
  dtutil -q compose 2023-06-15 09:05""",
)
@click.argument("date")
@click.argument("time")
@click.pass_obj
def compose(app: AppContext, date: str, time: str) -> None:
    """Combine DATE (yyyy-MM-dd) and TIME (HH:mm[:ss]) into one value."""
    app.emit(app.service.compose(date, time))
