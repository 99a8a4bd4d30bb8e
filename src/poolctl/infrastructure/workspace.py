"""Workspace — the single dependency injected into every service.

Owns the settings, the local state store and the Azure client. Both the
store and the client are created lazily, so validation never needs Azure
credentials and ``--help`` never opens the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from poolctl.infrastructure.azure import ElasticPoolClient
from poolctl.infrastructure.state import StateStore

if TYPE_CHECKING:
    from poolctl.config.settings import PoolSettings


class Workspace:
    """Settings plus lazily created state store and Azure client.

    Args:
        settings: Resolved settings.
        client: Pre-built client (tests inject a fake); built from
            settings on first use otherwise.
    """

    def __init__(self, settings: PoolSettings, *, client: ElasticPoolClient | None = None) -> None:
        self.settings = settings
        self._client = client
        self._store: StateStore | None = None

    @property
    def store(self) -> StateStore:
        if self._store is None:
            self._store = StateStore(self.settings.state_dir)
        return self._store

    @property
    def client(self) -> ElasticPoolClient:
        """The Azure client.

        Raises:
            AzureConfigError: no subscription is configured.
        """
        if self._client is None:
            self._client = ElasticPoolClient.from_settings(self.settings)
        return self._client

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
