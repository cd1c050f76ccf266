"""Unit tests for facts_cli.main."""

from __future__ import annotations

from unittest.mock import MagicMock

from click.testing import CliRunner

from facts_cli import __version__
from facts_cli.main import LAZY_COMMANDS, cli


class TestCLIHelp:
    """Tests for CLI help output."""

    def test_help_shows_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "--version" in result.output
        assert "--no-color" in result.output
        assert "--verbose" in result.output

    def test_help_shows_all_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in LAZY_COMMANDS:
            assert name in result.output

    def test_subcommand_help_loads_lazily(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compile", "--help"])

        assert result.exit_code == 0
        assert "--compiler" in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["nonexistent"])
        assert result.exit_code != 0


class TestCLIVersion:
    """Tests for CLI version output."""

    def test_version_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
        assert "facts" in result.output


class TestCLILogging:
    """Tests for logging configuration by the CLI group."""

    def test_default_level(self, cli_runner: CliRunner, configure_logging_mock: MagicMock) -> None:
        result = cli_runner.invoke(cli, ["extensions"])

        assert result.exit_code == 0
        configure_logging_mock.assert_called_once_with(log_level="WARNING", json_format=False)

    def test_verbose_level(self, cli_runner: CliRunner, configure_logging_mock: MagicMock) -> None:
        result = cli_runner.invoke(cli, ["--verbose", "extensions"])

        assert result.exit_code == 0
        configure_logging_mock.assert_called_once_with(log_level="DEBUG", json_format=False)


class TestExtensionsCommand:
    """Tests for the extensions subcommand."""

    def test_lists_extensions_in_order(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["extensions"])

        assert result.exit_code == 0
        assert result.output.split() == [".fiml", ".fidl", ".fiql", ".cql"]
