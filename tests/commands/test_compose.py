"""Tests for the compose and decompose commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from dtutil.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestComposeCommand:
    def test_compose(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compose", "2023-06-15", "14:30:00"])
        assert result.exit_code == 0
        assert "value: 2023-06-15 14:30:00" in result.stdout

    def test_compose_short_time(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "compose", "2023-06-15", "09:05"])
        assert result.stdout.strip() == "2023-06-15 09:05:00"

    def test_compose_bad_date(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compose", "2023-13-01", "09:05"])
        assert result.exit_code == 1
        assert "Invalid date" in result.stderr

    def test_compose_missing_argument(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compose", "2023-06-15"])
        assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_cwd")
class TestDecomposeCommand:
    def test_decompose(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "decompose", "2023-06-15 14:30:00"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2023-06-15"

    def test_decompose_bad_value(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["decompose", "2023-06-15"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
