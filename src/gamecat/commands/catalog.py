"""Commands: list registered games and export variant schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gamecat.commands._base import ASSET_TYPE, GAME, GamecatCommand

if TYPE_CHECKING:
    from gamecat.commands._context import AppContext


@click.command(
    cls=GamecatCommand,
    examples="""\
  gamecat games
  gamecat --json games
  gamecat -q games""",
)
@click.pass_obj
def games(app: AppContext) -> None:
    """List registered games and their asset types."""
    from gamecat.services.catalog import CatalogService

    app.emit(CatalogService(app.engine).list_games())


@click.command(
    cls=GamecatCommand,
    examples="""\
  gamecat schema elden-ring weapons
  gamecat --json schema tainted-grail magic
  gamecat -v schema elden-ring talismans""",
)
@click.argument("game", type=GAME)
@click.argument("variant_type", metavar="TYPE", type=ASSET_TYPE)
@click.pass_obj
def schema(app: AppContext, game: str, variant_type: str) -> None:
    """Show the fields and rules of one asset type."""
    from gamecat.services.catalog import CatalogService

    app.emit(CatalogService(app.engine).describe_variant(game, variant_type))
