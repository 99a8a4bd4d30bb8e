"""PoolService — create, update, read, import and delete elastic pools.

Pipeline for apply: VALIDATE → CONFLICT CHECK → EXPAND → SUBMIT → READ → PERSIST

INVARIANT: local state only records what Azure has confirmed. A failed
submission never stores an identity, and a pool Azure reports as gone is
removed from state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.core.exceptions import AzureError

from poolctl.domain.ids import InvalidResourceId, parse_pool_id
from poolctl.domain.rules import validate_pool
from poolctl.domain.sizing import changed_size_field, resolve_max_size_bytes
from poolctl.infrastructure.azure import AzureConfigError, ElasticPoolClient, PollTimeout
from poolctl.services._mapping import expand_pool, flatten_pool
from poolctl.services.base import BaseService
from poolctl.services.result import ServiceResult
from poolctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from poolctl.domain.ids import PoolAddress
    from poolctl.domain.pool import PoolConfig, PoolState

logger = logging.getLogger(__name__)


def _state_data(state: PoolState, **extra: Any) -> dict[str, Any]:
    return {"address": str(state.address), **state.model_dump(mode="json"), **extra}


def _remote_failure(op: str, action: str, address: PoolAddress, exc: Exception) -> ServiceResult:
    """Wrap an Azure error with the operation and resource coordinates."""
    logger.debug("Error %s %s: %s", action, address, exc)
    detail: dict[str, Any] = {
        "address": str(address),
        "resource_group": address.resource_group,
        "server": address.server,
        "name": address.name,
        "action": action,
    }
    status = getattr(getattr(exc, "response", None), "status_code", None)
    if status is not None:
        detail["status_code"] = status
    code = "POLL_TIMEOUT" if isinstance(exc, PollTimeout) else "REMOTE_ERROR"
    return ServiceResult.failure(
        op,
        code,
        f"Error {action} elastic pool {address.name!r} "
        f"(server {address.server!r} / resource group {address.resource_group!r}): {exc}",
        detail,
    )


def _not_tracked(op: str, address: PoolAddress) -> ServiceResult:
    return ServiceResult.failure(
        op,
        "NOT_TRACKED",
        f"Elastic pool {address} is not tracked; run 'poolctl apply' or 'poolctl import' first",
        {"address": str(address)},
    )


class PoolService(BaseService):
    """Reconciles definition files with elastic pools in Azure."""

    def _client(self, op: str) -> ElasticPoolClient | ServiceResult:
        try:
            return self._workspace.client
        except AzureConfigError as exc:
            return ServiceResult.failure(op, "AZURE_NOT_CONFIGURED", str(exc))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def apply(self, config: PoolConfig) -> ServiceResult:
        """Create the pool, or update it if it is already tracked."""
        op = "apply"
        address = config.address
        store = self._workspace.store
        prior = store.get(address)
        prior_size = prior.size if prior else None

        # ── VALIDATE ─────────────────────────────────────────────
        violation = validate_pool(config, prior=prior_size)
        if violation is not None:
            return ServiceResult.failure(
                op,
                violation.code,
                violation.message,
                {**violation.detail, "address": str(address)},
            )

        client = self._client(op)
        if isinstance(client, ServiceResult):
            return client

        # ── CONFLICT CHECK ───────────────────────────────────────
        if prior is None and self._workspace.settings.provider.require_import:
            try:
                with trace_span("get_existing"):
                    existing = client.get(address.resource_group, address.server, address.name)
            except AzureError as exc:
                return _remote_failure(op, "checking for presence of existing", address, exc)
            if existing is not None and existing.id:
                return ServiceResult.failure(
                    op,
                    "ALREADY_EXISTS",
                    f"Elastic pool {address} already exists with ID {existing.id!r}; "
                    "run 'poolctl import' to manage it",
                    {"address": str(address), "id": existing.id},
                )

        # ── EXPAND ───────────────────────────────────────────────
        desired = config.size
        changed = changed_size_field(prior_size, desired)
        max_size_bytes = resolve_max_size_bytes(prior_size, desired, changed)
        parameters = expand_pool(config, max_size_bytes=max_size_bytes)

        # ── SUBMIT ───────────────────────────────────────────────
        action = "updating" if prior is not None else "creating"
        try:
            with trace_span("create_or_update"):
                client.create_or_update(
                    address.resource_group, address.server, address.name, parameters
                )
            with trace_span("get"):
                remote = client.get(address.resource_group, address.server, address.name)
        except (AzureError, PollTimeout) as exc:
            return _remote_failure(op, action, address, exc)

        if remote is None or not remote.id:
            return ServiceResult.failure(
                op,
                "MISSING_ID",
                f"Cannot read ID of elastic pool {address} after {action} it",
                {"address": str(address)},
            )

        # ── READ + PERSIST ───────────────────────────────────────
        # Basic tier reports no size: state keeps the configured fields, never
        # bytes derived from them.
        fallback = desired
        if desired.max_size_gb is None and desired.max_size_bytes is None:
            fallback = prior_size
        state = flatten_pool(
            remote,
            resource_group=address.resource_group,
            server=address.server,
            fallback_size=fallback,
        )
        store.put(state)
        logger.info("Applied elastic pool %s (%s)", address, state.id)
        return ServiceResult.success(op, _state_data(state, created=prior is None))

    @traced
    def read(self, address: PoolAddress) -> ServiceResult:
        """Refresh a tracked pool from Azure."""
        op = "show"
        store = self._workspace.store
        prior = store.get(address)
        if prior is None:
            return _not_tracked(op, address)

        try:
            pool_id = parse_pool_id(prior.id)
        except InvalidResourceId as exc:
            return ServiceResult.failure(op, "INVALID_RESOURCE_ID", str(exc), {"id": prior.id})

        client = self._client(op)
        if isinstance(client, ServiceResult):
            return client

        try:
            with trace_span("get"):
                remote = client.get(pool_id.resource_group, pool_id.server, pool_id.name)
        except AzureError as exc:
            return _remote_failure(op, "reading", address, exc)

        if remote is None:
            store.remove(address)
            return ServiceResult.success(
                op,
                {"address": str(address), "id": prior.id, "exists": False},
                warnings=[f"Elastic pool {address} no longer exists; removed from state"],
            )

        state = flatten_pool(
            remote,
            resource_group=pool_id.resource_group,
            server=pool_id.server,
            fallback_size=prior.size,
        )
        store.put(state)
        return ServiceResult.success(op, _state_data(state, exists=True))

    @traced
    def delete(self, address: PoolAddress) -> ServiceResult:
        """Delete a tracked pool. A pool already gone from Azure is not an error."""
        op = "destroy"
        store = self._workspace.store
        prior = store.get(address)
        if prior is None:
            return _not_tracked(op, address)

        try:
            pool_id = parse_pool_id(prior.id)
        except InvalidResourceId as exc:
            return ServiceResult.failure(op, "INVALID_RESOURCE_ID", str(exc), {"id": prior.id})

        client = self._client(op)
        if isinstance(client, ServiceResult):
            return client

        try:
            with trace_span("delete"):
                found = client.delete(pool_id.resource_group, pool_id.server, pool_id.name)
        except (AzureError, PollTimeout) as exc:
            return _remote_failure(op, "deleting", address, exc)

        store.remove(address)
        warnings: list[str] = []
        if not found:
            warnings.append(f"Elastic pool {address} was already gone")
        return ServiceResult.success(
            op,
            {"address": str(address), "id": prior.id, "deleted": found, "exists": False},
            warnings=warnings,
        )

    @traced
    def import_pool(self, resource_id: str) -> ServiceResult:
        """Adopt an existing pool into state by its resource ID."""
        op = "import"
        try:
            pool_id = parse_pool_id(resource_id)
        except InvalidResourceId as exc:
            return ServiceResult.failure(op, "INVALID_RESOURCE_ID", str(exc), {"id": resource_id})

        address = pool_id.address
        store = self._workspace.store
        existing = store.get(address)
        if existing is not None:
            return ServiceResult.failure(
                op,
                "ALREADY_TRACKED",
                f"Elastic pool {address} is already tracked with ID {existing.id!r}",
                {"address": str(address), "id": existing.id},
            )

        client = self._client(op)
        if isinstance(client, ServiceResult):
            return client

        try:
            with trace_span("get"):
                remote = client.get(pool_id.resource_group, pool_id.server, pool_id.name)
        except AzureError as exc:
            return _remote_failure(op, "importing", address, exc)

        if remote is None or not remote.id:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No elastic pool exists with ID {resource_id!r}",
                {"address": str(address), "id": resource_id},
            )

        state = flatten_pool(remote, resource_group=pool_id.resource_group, server=pool_id.server)
        store.put(state)
        logger.info("Imported elastic pool %s (%s)", address, state.id)
        return ServiceResult.success(op, _state_data(state))

    @traced
    def list_pools(self) -> ServiceResult:
        """List tracked pools from local state (no remote calls)."""
        states = self._workspace.store.tracked()
        items = [state.summary() for state in states]
        return ServiceResult.success("list", {"items": items, "count": len(items)})
