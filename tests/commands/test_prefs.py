"""Tests for the prefs command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from confshift.cli import cli


class TestPrefsShow:
    def test_defaults(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["prefs", "show"])
        assert result.exit_code == 0
        assert "source_format: idea" in result.stdout
        assert "target_format: dotenv" in result.stdout

    def test_json(self, cli_runner: CliRunner, state_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "prefs", "show"])
        data = json.loads(result.stdout)
        assert data["op"] == "prefs_show"
        assert data["data"]["state_file"] == str(state_file)

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "prefs", "show"])
        assert result.stdout == "idea -> dotenv\n"

    def test_defaults_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "confshift.toml").write_text(
            '[preferences]\ndefault_source = "compose"\ndefault_target = "spring-env"\n'
        )
        result = cli_runner.invoke(cli, ["-q", "prefs", "show"])
        assert result.stdout == "compose -> spring-env\n"


class TestPrefsSet:
    def test_set_persists(self, cli_runner: CliRunner, state_file: Path) -> None:
        result = cli_runner.invoke(cli, ["prefs", "set", "--source", "dotenv"])
        assert result.exit_code == 0
        assert state_file.exists()
        shown = cli_runner.invoke(cli, ["-q", "prefs", "show"])
        assert shown.stdout == "dotenv -> dotenv\n"

    def test_requires_an_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["prefs", "set"])
        assert result.exit_code == 1
        assert "No changes specified" in result.stderr

    def test_invalid_format(self, cli_runner: CliRunner, state_file: Path) -> None:
        result = cli_runner.invoke(cli, ["prefs", "set", "--target", "compose"])
        assert result.exit_code == 1
        assert "Unknown target format: compose" in result.stderr
        assert not state_file.exists()


class TestPrefsSwapReset:
    def test_swap(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "prefs", "swap"])
        assert result.exit_code == 0
        assert result.stdout == "dotenv -> idea\n"

    def test_swap_rejected(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["prefs", "set", "--source", "compose", "--target", "spring-yaml"])
        result = cli_runner.invoke(cli, ["prefs", "swap"])
        assert result.exit_code == 1
        assert "spring-yaml cannot be used as a source format" in result.stderr

    def test_reset(self, cli_runner: CliRunner, state_file: Path) -> None:
        cli_runner.invoke(cli, ["prefs", "set", "--source", "yaml", "--target", "properties"])
        result = cli_runner.invoke(cli, ["-q", "prefs", "reset"])
        assert result.exit_code == 0
        assert result.stdout == "idea -> dotenv\n"
        assert not state_file.exists()
