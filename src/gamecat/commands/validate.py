"""Command: validate asset records from a JSON or YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from gamecat.commands._base import GAME, GamecatCommand

if TYPE_CHECKING:
    from gamecat.commands._context import AppContext


@click.command(
    cls=GamecatCommand,
    examples="""\
  gamecat validate moonveil.json
  gamecat validate assets.yaml --game elden-ring
  gamecat --json validate assets.json
  cat record.json | gamecat validate -""",
)
@click.argument("source", metavar="FILE")
@click.option(
    "--game",
    type=GAME,
    default=None,
    help="Validate every record as this game (default: each record's gameSlug).",
)
@click.pass_obj
def validate(app: AppContext, source: str, game: str | None) -> None:
    """Validate one record or a list of records. FILE may be '-' for stdin."""
    from gamecat.services.validate import ValidateService

    svc = ValidateService(app.engine)
    if source == "-":
        text = click.get_text_stream("stdin").read()
        app.emit(svc.validate_text(text, game=game))
    else:
        app.emit(svc.validate_file(Path(source), game=game))
