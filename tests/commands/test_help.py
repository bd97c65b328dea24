"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from confshift.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["config", "--help"], ["FROM", "TO", "[INPUT]", "--output"]),
    (["env", "--help"], ["FROM", "TO", "idea", "dotenv", "linux"]),
    (["compose", "--help"], ["--to", "--inspect", "--output", "spring-yaml"]),
    (["run", "--help"], ["--reverse", "--output"]),
    (["prefs", "--help"], ["show", "set", "swap", "reset"]),
    (["prefs", "set", "--help"], ["--source", "--target", "compose"]),
    (["prefs", "show", "--help"], []),
    (["prefs", "swap", "--help"], []),
    (["prefs", "reset", "--help"], []),
]


@pytest.mark.parametrize(
    ("args", "keywords"),
    HELP_COMMANDS,
    ids=[" ".join(args) for args, _ in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    for keyword in keywords:
        assert keyword in result.output, f"{keyword!r} missing from {args} help"
