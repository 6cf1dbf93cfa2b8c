"""Click building blocks shared by gamecat commands.

``GamecatCommand`` and ``GamecatGroup`` accept an ``examples`` string and
expose it through an eager ``--examples`` flag, so ``--help`` stays short.
The group lists subcommands in registration order, validate first.

``GAME`` and ``ASSET_TYPE`` are parameter types that shell-complete
built-in game ids and, once a game is given, its asset types. They never
reject a value: an unknown game or type is reported by the services as a
validation outcome, not as a usage error.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click
from click.shell_completion import CompletionItem


def _examples_option(examples: str) -> click.Option:
    text = textwrap.indent(textwrap.dedent(examples).strip("\n"), "  ")

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(text)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples and exit.",
    )


class GamecatCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


class GamecatGroup(click.Group):
    """Group whose subcommands default to :class:`GamecatCommand`."""

    command_class = GamecatCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)


def _complete(choices: tuple[str, ...], incomplete: str) -> list[CompletionItem]:
    return [CompletionItem(choice) for choice in choices if choice.startswith(incomplete)]


class GameIdType(click.ParamType):
    """A game id; completes from the built-in rulesets."""

    name = "game"

    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> list[CompletionItem]:
        from gamecat.games import DEFAULT_REGISTRY

        return _complete(DEFAULT_REGISTRY.games, incomplete)


class AssetTypeType(click.ParamType):
    """An asset type (discriminant); completes from the game already given."""

    name = "type"

    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> list[CompletionItem]:
        from gamecat.games import DEFAULT_REGISTRY

        profile = DEFAULT_REGISTRY.lookup(ctx.params.get("game"))
        if profile is None:
            return []
        return _complete(profile.discriminants, incomplete)


GAME = GameIdType()
ASSET_TYPE = AssetTypeType()
