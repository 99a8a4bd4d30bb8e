"""Tests for the destroy CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from poolctl.cli import cli
from tests.conftest import FakeElasticPools, write_definition


@pytest.mark.usefixtures("_fake_azure")
class TestDestroyCommand:
    def test_destroy_with_yes(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        result = cli_runner.invoke(cli, ["--json", "destroy", "rg-sql/sql-srv-1/pool-1", "--yes"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == "destroy"
        assert data["data"]["deleted"] is True
        assert data["data"]["exists"] is False
        assert fake_pools.pools == {}

    def test_destroy_by_file_confirmed(self, cli_runner: CliRunner, project_root: Path) -> None:
        path = write_definition(project_root)
        cli_runner.invoke(cli, ["apply", str(path)])
        result = cli_runner.invoke(cli, ["destroy", str(path)], input="y\n")
        assert result.exit_code == 0
        assert "OK  destroy" in result.output
        assert "deleted: True" in result.output

    def test_destroy_declined(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        result = cli_runner.invoke(cli, ["destroy", "rg-sql/sql-srv-1/pool-1"], input="n\n")
        assert result.exit_code == 1
        assert "begin_delete" not in [call[0] for call in fake_pools.calls]
        assert len(fake_pools.pools) == 1

    def test_destroy_already_gone(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        cli_runner.invoke(cli, ["apply", str(write_definition(project_root))])
        fake_pools.pools.clear()
        result = cli_runner.invoke(cli, ["--json", "destroy", "rg-sql/sql-srv-1/pool-1", "-y"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["deleted"] is False
        assert data["warnings"]

    def test_destroy_untracked(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "destroy", "rg-sql/sql-srv-1/pool-1", "-y"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_TRACKED"
