"""Tests for the root postctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from postctl import __version__
from postctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "postctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/postctl-test.toml", "--version"])
    assert result.exit_code == 0


def test_root_must_exist(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--root", str(tmp_path / "missing"), "check"])
    assert result.exit_code == 2


def test_root_option_selects_tree(cli_runner: CliRunner, content_root: Path) -> None:
    result = cli_runner.invoke(cli, ["--root", str(content_root), "-q", "query", "list"])
    assert result.exit_code == 0
    assert "work/acme.md" in result.stdout.splitlines()


def test_config_file_sets_root(cli_runner: CliRunner, content_root: Path) -> None:
    config = content_root / "postctl.toml"
    config.write_text('[content]\ndirs = ["work"]\n', encoding="utf-8")
    result = cli_runner.invoke(cli, ["-c", str(config), "-q", "query", "list"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["work/acme.md"]


# --- Command groups registered ---

EXPECTED_COMMANDS = ["check", "query"]


@pytest.mark.parametrize("name", EXPECTED_COMMANDS)
def test_command_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0


@pytest.mark.parametrize("name", ["list", "get", "tags"])
def test_query_subcommands(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, ["query", name, "--help"])
    assert result.exit_code == 0
