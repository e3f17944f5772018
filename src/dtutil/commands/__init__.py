"""Subcommand modules for dtutil.

Provides register_commands() which uses deferred imports to keep
``dtutil --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from dtutil.commands.compose import compose
    from dtutil.commands.decompose import decompose
    from dtutil.commands.diff import diff
    from dtutil.commands.format_cmd import format_cmd
    from dtutil.commands.parse import parse

    cli.add_command(format_cmd)
    cli.add_command(parse)
    cli.add_command(diff)
    cli.add_command(compose)
    cli.add_command(decompose)
