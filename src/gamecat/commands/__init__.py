"""Subcommand modules for gamecat.

Provides register_commands() which uses deferred imports to keep
``gamecat --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from gamecat.commands.catalog import games, schema
    from gamecat.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(games)
    cli.add_command(schema)
