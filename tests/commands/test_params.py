"""Tests for shared command building blocks: ordering and completion."""

from __future__ import annotations

import click

from gamecat.cli import cli
from gamecat.commands._base import ASSET_TYPE, GAME
from gamecat.commands.catalog import schema


def _completions(param_type: click.ParamType, incomplete: str, **params: str) -> list[str]:
    ctx = click.Context(schema)
    ctx.params.update(params)
    param = schema.params[0]
    return [item.value for item in param_type.shell_complete(ctx, param, incomplete)]


class TestGroupOrdering:
    def test_commands_in_registration_order(self) -> None:
        assert cli.list_commands(click.Context(cli)) == ["validate", "games", "schema"]


class TestGameCompletion:
    def test_all_games(self) -> None:
        assert _completions(GAME, "") == ["elden-ring", "tainted-grail"]

    def test_prefix(self) -> None:
        assert _completions(GAME, "ta") == ["tainted-grail"]

    def test_values_pass_through_unchecked(self) -> None:
        assert GAME.convert("hollow-knight", None, None) == "hollow-knight"


class TestAssetTypeCompletion:
    def test_types_of_given_game(self) -> None:
        assert _completions(ASSET_TYPE, "", game="tainted-grail") == [
            "weapon",
            "armor",
            "jewelry",
            "magic",
            "relic",
        ]

    def test_prefix(self) -> None:
        assert _completions(ASSET_TYPE, "wea", game="elden-ring") == ["weapons"]

    def test_unknown_game_completes_nothing(self) -> None:
        assert _completions(ASSET_TYPE, "", game="hollow-knight") == []
        assert _completions(ASSET_TYPE, "") == []
