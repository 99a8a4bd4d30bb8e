"""Azure access — credentials and the elastic pool operations wrapper.

Wraps ``SqlManagementClient.elastic_pools`` with the three calls the
reconciler needs. Not-found is translated to a return value; every other
``azure.core`` error propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.core.exceptions import ResourceNotFoundError
from azure.identity import AzureCliCredential, ChainedTokenCredential, DefaultAzureCredential
from azure.mgmt.sql import SqlManagementClient

if TYPE_CHECKING:
    from azure.core.credentials import TokenCredential
    from azure.core.polling import LROPoller
    from azure.mgmt.sql.models import ElasticPool

    from poolctl.config.settings import PoolSettings

logger = logging.getLogger(__name__)


class AzureConfigError(ValueError):
    """Azure access is not configured (e.g. no subscription ID)."""


class PollTimeout(Exception):
    """A long-running operation did not finish within the polling timeout."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} did not complete within {timeout:g} seconds")
        self.operation = operation
        self.timeout = timeout


def build_credential(*, prefer_cli: bool = False) -> TokenCredential:
    """Return the credential chain used for ARM calls.

    ``prefer_cli`` puts the Azure CLI login first, which is what pipeline
    tasks running under ``az login`` expect.
    """
    if prefer_cli:
        return ChainedTokenCredential(AzureCliCredential(), DefaultAzureCredential())
    return DefaultAzureCredential()


class ElasticPoolClient:
    """Thin wrapper over the ``elastic_pools`` operations group.

    Args:
        operations: ``SqlManagementClient(...).elastic_pools`` or a test double.
        poll_timeout: Seconds to wait for a long-running operation, or None
            to wait indefinitely.
    """

    def __init__(self, operations: Any, *, poll_timeout: float | None = None) -> None:
        self._ops = operations
        self._poll_timeout = poll_timeout

    @classmethod
    def from_settings(cls, settings: PoolSettings) -> ElasticPoolClient:
        """Build a client for the configured subscription."""
        subscription_id = settings.subscription_id
        if not subscription_id:
            msg = (
                "No Azure subscription configured: set [azure] subscription_id in "
                "poolctl.toml, POOLCTL_AZURE__SUBSCRIPTION_ID or AZURE_SUBSCRIPTION_ID"
            )
            raise AzureConfigError(msg)
        credential = build_credential(prefer_cli=settings.azure.prefer_cli_credential)
        client = SqlManagementClient(credential=credential, subscription_id=subscription_id)
        return cls(client.elastic_pools, poll_timeout=settings.polling.timeout_seconds)

    def get(self, resource_group: str, server: str, name: str) -> ElasticPool | None:
        """Fetch a pool, or None if it does not exist."""
        logger.debug("GET elastic pool %s/%s/%s", resource_group, server, name)
        try:
            return self._ops.get(resource_group, server, name)
        except ResourceNotFoundError:
            return None

    def create_or_update(
        self,
        resource_group: str,
        server: str,
        name: str,
        parameters: ElasticPool,
    ) -> ElasticPool:
        """Create or update a pool and block until the operation finishes."""
        logger.info("Creating/updating elastic pool %s/%s/%s", resource_group, server, name)
        poller = self._ops.begin_create_or_update(resource_group, server, name, parameters)
        return self._wait(poller, f"create/update of elastic pool {name!r}")

    def delete(self, resource_group: str, server: str, name: str) -> bool:
        """Delete a pool and wait. Returns False if it was already gone."""
        logger.info("Deleting elastic pool %s/%s/%s", resource_group, server, name)
        try:
            poller = self._ops.begin_delete(resource_group, server, name)
            self._wait(poller, f"deletion of elastic pool {name!r}")
        except ResourceNotFoundError:
            return False
        return True

    def _wait(self, poller: LROPoller[Any], operation: str) -> Any:
        result = poller.result(timeout=self._poll_timeout)
        if not poller.done():
            raise PollTimeout(operation, self._poll_timeout or 0.0)
        return result
