"""Tests for the root CLI group."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from dtutil import __version__
from dtutil.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("format", "parse", "diff", "compose", "decompose"):
            assert name in result.output

    def test_no_command_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["bogus"])
        assert result.exit_code == 2

    def test_explicit_config(self, cli_runner: CliRunner, tmp_path) -> None:
        config = tmp_path / "conf" / "custom.toml"
        config.parent.mkdir()
        config.write_text('[format]\nlocale = "fr_FR"\n')
        args = ["-c", str(config), "-q", "format", "2023-06-15 14:30:00", "-p", "MMMM"]
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert result.stdout.strip() == "juin"

    def test_locale_flag_beats_config(self, cli_runner: CliRunner, _isolated_cwd) -> None:
        (_isolated_cwd / "dtutil.toml").write_text('[format]\nlocale = "fr_FR"\n')
        args = ["--locale", "de_DE", "-q", "format", "2023-06-15 14:30:00", "-p", "MMMM"]
        result = cli_runner.invoke(cli, args)
        assert result.stdout.strip() == "Juni"

    def test_invalid_config(self, cli_runner: CliRunner, _isolated_cwd) -> None:
        (_isolated_cwd / "dtutil.toml").write_text("[format\n")
        result = cli_runner.invoke(cli, ["parse", "2023-06-15 14:30:00"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_invalid_config_value(self, cli_runner: CliRunner, _isolated_cwd) -> None:
        (_isolated_cwd / "dtutil.toml").write_text('[diff]\nunit = "weeks"\n')
        result = cli_runner.invoke(cli, ["diff", "2023-01-01 00:00:00", "2023-01-02 00:00:00"])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_log_json_debug(self, cli_runner: CliRunner) -> None:
        args = ["-v", "--log-json", "-q", "diff", "2023-01-01 00:00:00", "2023-01-02 00:00:00"]
        result = cli_runner.invoke(cli, [*args, "-u", "weeks"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "24"
        assert "falling back to hours" in result.stderr
