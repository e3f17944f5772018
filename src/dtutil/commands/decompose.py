"""Command: take the calendar date out of a value."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil decompose "2023-06-15 14:30:00\"""",
)
@click.argument("value")
@click.pass_obj
def decompose(app: AppContext, value: str) -> None:
    """Print the calendar date of VALUE as yyyy-MM-dd."""
    app.emit(app.service.decompose(value))
