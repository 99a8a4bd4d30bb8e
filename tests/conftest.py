"""Shared pytest fixtures and test helpers for poolctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.sql.models import ElasticPool, ElasticPoolPerDatabaseSettings, Sku
from click.testing import CliRunner

from poolctl.config.settings import PoolSettings
from poolctl.domain.ids import format_pool_id
from poolctl.infrastructure.azure import ElasticPoolClient
from poolctl.infrastructure.workspace import Workspace
from poolctl.services.telemetry import disable_telemetry

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"

STANDARD_DEFINITION = """\
name = "pool-1"
resource_group_name = "rg-sql"
server_name = "sql-srv-1"
location = "West Europe"
max_size_gb = 100

[sku]
name = "StandardPool"
tier = "Standard"
capacity = 50

[per_database_settings]
min_capacity = 0
max_capacity = 50

[tags]
environment = "production"
"""


# ---------------------------------------------------------------------------
# Azure test doubles
# ---------------------------------------------------------------------------


class FakePoller:
    """Stands in for ``azure.core.polling.LROPoller``."""

    def __init__(self, result: Any = None, *, finished: bool = True) -> None:
        self._result = result
        self._finished = finished
        self.timeout: float | None = None

    def result(self, timeout: float | None = None) -> Any:
        self.timeout = timeout
        return self._result if self._finished else None

    def done(self) -> bool:
        return self._finished


class FakeElasticPools:
    """In-memory ``SqlManagementClient.elastic_pools`` operations group.

    Returns real ``azure.mgmt.sql.models.ElasticPool`` objects and raises
    real ``azure.core`` exceptions. Set ``error`` to make every call raise
    it, or ``finish_polling = False`` to simulate a poller timeout.
    """

    def __init__(self, subscription_id: str = SUBSCRIPTION_ID) -> None:
        self.subscription_id = subscription_id
        self.pools: dict[tuple[str, str, str], ElasticPool] = {}
        self.calls: list[tuple[str, str, str, str]] = []
        self.submitted: list[ElasticPool] = []
        self.error: Exception | None = None
        self.finish_polling = True

    @staticmethod
    def _key(resource_group: str, server: str, name: str) -> tuple[str, str, str]:
        return (resource_group.lower(), server.lower(), name.lower())

    def _record(self, call: str, resource_group: str, server: str, name: str) -> None:
        self.calls.append((call, resource_group, server, name))
        if self.error is not None:
            raise self.error

    def add(
        self,
        resource_group: str,
        server: str,
        name: str,
        *,
        sku: Sku | None = None,
        max_size_bytes: int | None = 100 * 2**30,
        location: str = "westeurope",
    ) -> ElasticPool:
        """Seed a pool as if it had been created outside poolctl."""
        pool = ElasticPool(
            location=location,
            sku=sku or Sku(name="StandardPool", tier="Standard", capacity=50),
            per_database_settings=ElasticPoolPerDatabaseSettings(min_capacity=0, max_capacity=50),
            max_size_bytes=max_size_bytes,
            tags={},
        )
        return self._store(resource_group, server, name, pool)

    def _store(self, resource_group: str, server: str, name: str, pool: ElasticPool) -> ElasticPool:
        pool.id = format_pool_id(self.subscription_id, resource_group, server, name)
        pool.name = name
        pool.type = "Microsoft.Sql/servers/elasticPools"
        pool.state = "Ready"
        pool.creation_date = datetime(2024, 1, 1, tzinfo=UTC)
        self.pools[self._key(resource_group, server, name)] = pool
        return pool

    def get(
        self, resource_group_name: str, server_name: str, elastic_pool_name: str
    ) -> ElasticPool:
        self._record("get", resource_group_name, server_name, elastic_pool_name)
        key = self._key(resource_group_name, server_name, elastic_pool_name)
        if key not in self.pools:
            raise ResourceNotFoundError(message=f"elastic pool {elastic_pool_name} not found")
        return self.pools[key]

    def begin_create_or_update(
        self,
        resource_group_name: str,
        server_name: str,
        elastic_pool_name: str,
        parameters: ElasticPool,
    ) -> FakePoller:
        self._record(
            "begin_create_or_update", resource_group_name, server_name, elastic_pool_name
        )
        self.submitted.append(parameters)
        if not self.finish_polling:
            return FakePoller(finished=False)
        stored = ElasticPool(
            location=parameters.location,
            sku=parameters.sku,
            per_database_settings=parameters.per_database_settings,
            # Basic tier pools come back without a size.
            max_size_bytes=(
                None if (parameters.sku and parameters.sku.tier == "Basic")
                else parameters.max_size_bytes
            ),
            zone_redundant=False,
            tags=parameters.tags,
        )
        pool = self._store(resource_group_name, server_name, elastic_pool_name, stored)
        return FakePoller(pool)

    def begin_delete(
        self, resource_group_name: str, server_name: str, elastic_pool_name: str
    ) -> FakePoller:
        self._record("begin_delete", resource_group_name, server_name, elastic_pool_name)
        key = self._key(resource_group_name, server_name, elastic_pool_name)
        if key not in self.pools:
            raise ResourceNotFoundError(message=f"elastic pool {elastic_pool_name} not found")
        if not self.finish_polling:
            return FakePoller(finished=False)
        del self.pools[key]
        return FakePoller()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell settings out of the tests."""
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    monkeypatch.delenv("POOLCTL_CONFIG", raising=False)
    monkeypatch.delenv("POOLCTL_AZURE__SUBSCRIPTION_ID", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """A verbose CLI run enables telemetry for the rest of the thread."""
    yield
    disable_telemetry()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory (CWD) with a ``poolctl.toml``."""
    (tmp_path / "poolctl.toml").write_text(
        f'[azure]\nsubscription_id = "{SUBSCRIPTION_ID}"\n', encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_pools() -> FakeElasticPools:
    return FakeElasticPools()


@pytest.fixture
def settings(project_root: Path) -> PoolSettings:
    return PoolSettings.from_cli(project_root=project_root)


@pytest.fixture
def workspace(settings: PoolSettings, fake_pools: FakeElasticPools) -> Iterator[Workspace]:
    """Workspace on a temp project, wired to the in-memory Azure fake."""
    ws = Workspace(settings, client=ElasticPoolClient(fake_pools, poll_timeout=30.0))
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _fake_azure(
    project_root: Path, fake_pools: FakeElasticPools, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Route CLI commands to the in-memory Azure fake.

    Use via ``@pytest.mark.usefixtures("_fake_azure")`` on command test
    classes.
    """

    def _from_settings(cls: type[ElasticPoolClient], settings: PoolSettings) -> ElasticPoolClient:
        return cls(fake_pools, poll_timeout=settings.polling.timeout_seconds)

    monkeypatch.setattr(ElasticPoolClient, "from_settings", classmethod(_from_settings))


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_definition(directory: Path, filename: str = "pool.toml", body: str | None = None) -> Path:
    """Write a definition file (the Standard pool by default) and return its path."""
    path = directory / filename
    path.write_text(body if body is not None else STANDARD_DEFINITION, encoding="utf-8")
    return path


def definition(**overrides: Any) -> dict[str, Any]:
    """Raw definition data for ``PoolConfig.model_validate``."""
    data: dict[str, Any] = {
        "name": "pool-1",
        "resource_group_name": "rg-sql",
        "server_name": "sql-srv-1",
        "location": "West Europe",
        "max_size_gb": 100,
        "sku": {"name": "StandardPool", "tier": "Standard", "capacity": 50},
        "per_database_settings": {"min_capacity": 0, "max_capacity": 50},
        "tags": {"environment": "production"},
    }
    data.update(overrides)
    return data
