"""Tests for the apply CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from azure.core.exceptions import HttpResponseError
from click.testing import CliRunner

from poolctl.cli import cli
from poolctl.domain.ids import format_pool_id
from tests.conftest import SUBSCRIPTION_ID, STANDARD_DEFINITION, FakeElasticPools, write_definition

POOL_ID = format_pool_id(SUBSCRIPTION_ID, "rg-sql", "sql-srv-1", "pool-1")


@pytest.mark.usefixtures("_fake_azure")
class TestApplyCommand:
    def test_create(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "apply"
        assert data["data"]["created"] is True
        assert data["data"]["id"] == POOL_ID
        assert ("rg-sql", "sql-srv-1", "pool-1") in fake_pools.pools

    def test_second_apply_updates(self, cli_runner: CliRunner, project_root: Path) -> None:
        path = write_definition(project_root)
        cli_runner.invoke(cli, ["apply", str(path)])
        path.write_text(STANDARD_DEFINITION.replace("max_size_gb = 100", "max_size_gb = 200"))
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["created"] is False
        assert data["max_size_gb"] == 200

    def test_human_output(self, cli_runner: CliRunner, project_root: Path) -> None:
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["apply", str(path)])
        assert result.exit_code == 0
        assert "OK  apply" in result.output
        assert "action: created" in result.output
        assert "100 GB" in result.output

    def test_quiet_prints_id(self, cli_runner: CliRunner, project_root: Path) -> None:
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["-q", "apply", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == POOL_ID

    def test_untracked_existing_pool_conflicts(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        fake_pools.add("rg-sql", "sql-srv-1", "pool-1")
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "ALREADY_EXISTS"
        assert "poolctl import" in payload["error"]["message"]
        assert fake_pools.submitted == []

    def test_rule_violation_submits_nothing(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        body = STANDARD_DEFINITION.replace("max_size_gb = 100", "max_size_gb = 1000")
        path = write_definition(project_root, body=body)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "DTU_MAX_SIZE_EXCEEDED"
        assert fake_pools.calls == []

    def test_remote_error(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        fake_pools.error = HttpResponseError(message="throttled")
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 1
        assert result.stderr.startswith("{")
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "REMOTE_ERROR"
        assert payload["error"]["detail"]["server"] == "sql-srv-1"

    def test_poll_timeout(
        self, cli_runner: CliRunner, project_root: Path, fake_pools: FakeElasticPools
    ) -> None:
        fake_pools.finish_polling = False
        path = write_definition(project_root)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "POLL_TIMEOUT"

        listing = cli_runner.invoke(cli, ["--json", "list"])
        assert json.loads(listing.output)["data"]["count"] == 0


class TestApplyWithoutSubscription:
    def test_azure_not_configured(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        path = write_definition(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "apply", str(path)])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "AZURE_NOT_CONFIGURED"
