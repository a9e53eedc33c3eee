"""Tests for the root agentpack CLI."""

from pathlib import Path

from click.testing import CliRunner

from agentpack import __version__
from agentpack.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "agentpack" in result.output


def test_short_help_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_unknown_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--bogus"])
    assert result.exit_code == 2
    assert "No such option" in result.stderr


def test_global_flags_accepted(cli_runner: CliRunner) -> None:
    for flag in ("--json", "-q", "-v", "--log-json"):
        result = cli_runner.invoke(cli, [flag, "--version"])
        assert result.exit_code == 0, flag


EXPECTED_COMMANDS = ["build", "locate", "targets"]


def test_commands_registered(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in EXPECTED_COMMANDS:
        assert name in result.output


def test_command_help(cli_runner: CliRunner) -> None:
    for name in EXPECTED_COMMANDS:
        result = cli_runner.invoke(cli, [name, "--help"])
        assert result.exit_code == 0, name


def test_examples_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["build", "--examples"])
    assert result.exit_code == 0
    assert "agentpack build all --force" in result.output


def test_root_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert "  $ agentpack build all" in result.output


def test_help_lists_commands_in_registration_order(cli_runner: CliRunner) -> None:
    output = cli_runner.invoke(cli, ["--help"]).output
    positions = [output.index(f"  {name}") for name in EXPECTED_COMMANDS]
    assert positions == sorted(positions)


def test_invalid_config_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "agentpack.toml").write_text('[source]\nnested_dir = ".."\n')
    result = cli_runner.invoke(cli, ["-C", str(tmp_path), "targets"])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid configuration" in result.stderr
