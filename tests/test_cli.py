"""Tests for the root svcsched CLI."""

import pytest
from click.testing import CliRunner

from svcsched import __version__
from svcsched.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "svcsched" in result.output
    for command in ("run", "plan", "services"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert "svcsched plan" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_config")
def test_missing_config_file(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "nope.toml", "plan"])
    assert result.exit_code == 1
    assert "Config file not found: nope.toml" in result.stderr


@pytest.mark.usefixtures("_isolated_config")
def test_subcommand_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["plan", "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
