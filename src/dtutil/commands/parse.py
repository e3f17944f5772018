"""Command: parse text into a value."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil parse "2023-06-15 14:30:00"
  dtutil parse "15/06/2023 2:30 PM" --pattern "dd/MM/yyyy h:mm a"
  dtutil --json parse "2023-06-15 14:30:00\"""",
)
@click.argument("text")
@click.option("-p", "--pattern", default=None, help="Pattern TEXT is written in.")
@click.pass_obj
def parse(app: AppContext, text: str, pattern: str | None) -> None:
    """Parse TEXT and print it in the input pattern and ISO 8601."""
    app.emit(app.service.parse(text, pattern=pattern))
