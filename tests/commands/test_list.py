"""Tests for the list CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from poolctl.cli import cli
from tests.conftest import STANDARD_DEFINITION, FakeElasticPools, write_definition


@pytest.mark.usefixtures("_fake_azure")
class TestListCommand:
    def test_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"] == {"items": [], "count": 0}

    def test_lists_applied_pools(self, cli_runner: CliRunner, project_root: Path) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        other = STANDARD_DEFINITION.replace('name = "pool-1"', 'name = "pool-2"', 1)
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root, "b.toml", other))])

        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "rg-sql/sql-srv-1/pool-1" in result.output
        assert "rg-sql/sql-srv-1/pool-2" in result.output
        assert "2 pools tracked" in result.output

    def test_quiet_prints_addresses(self, cli_runner: CliRunner, project_root: Path) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        result = cli_runner.invoke(cli, ["-q", "list"])
        assert result.exit_code == 0
        assert result.output.strip() == "rg-sql/sql-srv-1/pool-1"

    def test_does_not_call_azure(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        fake_pools.calls.clear()
        cli_runner.invoke(cli, ["list"])
        assert fake_pools.calls == []
