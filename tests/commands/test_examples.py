"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from gamecat.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["gamecat games", "gamecat schema tainted-grail weapon"]),
    (["validate", "--examples"], ["--game elden-ring", "gamecat validate -"]),
    (["games", "--examples"], ["gamecat -q games"]),
    (["schema", "--examples"], ["gamecat schema elden-ring weapons"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples") or "root"


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


class TestExamplesEagerExit:
    """--examples exits before required arguments are checked."""

    @pytest.mark.parametrize("command", ["validate", "schema"])
    def test_examples_skips_required_args(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output

    @pytest.mark.parametrize("command", ["validate", "games", "schema"])
    def test_examples_in_help(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--help"])
        assert "--examples" in result.output
