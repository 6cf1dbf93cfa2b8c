"""Root CLI group for gamecat with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from gamecat import __version__
from gamecat.commands import register_commands
from gamecat.commands._base import GamecatGroup
from gamecat.commands._context import AppContext
from gamecat.config.settings import GamecatSettings


@click.group(
    cls=GamecatGroup,
    invoke_without_command=True,
    examples="""\
  gamecat games
  gamecat validate moonveil.json
  gamecat --json validate assets.yaml --game elden-ring
  gamecat schema tainted-grail weapon""",
)
@click.version_option(version=__version__, prog_name="gamecat")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """gamecat: validate game asset catalog records."""
    ctx.ensure_object(dict)
    try:
        settings = GamecatSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
