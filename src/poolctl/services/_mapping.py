"""Expand/flatten between poolctl models and ``azure.mgmt.sql`` models.

Expand turns a desired :class:`PoolConfig` into the ``ElasticPool`` body
sent to ARM. Flatten turns an ``ElasticPool`` read from ARM into a
:class:`PoolState`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from azure.mgmt.sql.models import ElasticPool, ElasticPoolPerDatabaseSettings, Sku

from poolctl.domain.pool import (
    ElasticPoolProperties,
    PerDatabaseSettings,
    PoolConfig,
    PoolSku,
    PoolState,
    normalize_location,
)
from poolctl.domain.sizing import SizeSpec, bytes_to_gb
from poolctl.domain.types import ServiceTier


def _enum_value(value: Any) -> str:
    """SDK enums are str subclasses; return their wire value."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def expand_sku(sku: PoolSku) -> Sku:
    return Sku(
        name=sku.name,
        tier=sku.tier,
        family=sku.family or None,
        capacity=sku.capacity,
    )


def expand_per_database_settings(settings: PerDatabaseSettings) -> ElasticPoolPerDatabaseSettings:
    return ElasticPoolPerDatabaseSettings(
        min_capacity=settings.min_capacity,
        max_capacity=settings.max_capacity,
    )


def expand_pool(config: PoolConfig, *, max_size_bytes: int | None) -> ElasticPool:
    """Build the create-or-update body for *config*.

    ``max_size_bytes`` is left out when None so the service applies the
    tier default.
    """
    return ElasticPool(
        location=config.location,
        tags=dict(config.tags),
        sku=expand_sku(config.sku),
        per_database_settings=expand_per_database_settings(config.per_database_settings),
        max_size_bytes=max_size_bytes,
    )


def flatten_sku(sku: Sku | None) -> PoolSku | None:
    if sku is None:
        return None
    return PoolSku(
        name=sku.name or "",
        tier=sku.tier or "",
        family=sku.family or "",
        capacity=sku.capacity or 0,
    )


def flatten_per_database_settings(
    settings: ElasticPoolPerDatabaseSettings | None,
) -> PerDatabaseSettings | None:
    if settings is None:
        return None
    return PerDatabaseSettings(
        min_capacity=settings.min_capacity or 0.0,
        max_capacity=settings.max_capacity or 0.0,
    )


def flatten_properties(pool: ElasticPool) -> ElasticPoolProperties:
    creation = pool.creation_date
    if isinstance(creation, datetime):
        creation_date = creation.isoformat()
    else:
        creation_date = str(creation or "")
    return ElasticPoolProperties(
        state=_enum_value(pool.state),
        creation_date=creation_date,
        max_size_bytes=pool.max_size_bytes,
        zone_redundant=pool.zone_redundant,
        license_type=_enum_value(pool.license_type),
    )


def flatten_pool(
    pool: ElasticPool,
    *,
    resource_group: str,
    server: str,
    fallback_size: SizeSpec | None = None,
) -> PoolState:
    """Build a :class:`PoolState` from an ARM response.

    Basic tier pools do not report ``max_size_bytes``; for them the size
    fields keep *fallback_size* (the last known or just-requested size).
    """
    sku = flatten_sku(pool.sku)
    fallback = fallback_size or SizeSpec()
    max_size_bytes = fallback.max_size_bytes
    max_size_gb = fallback.max_size_gb

    tier = sku.tier if sku else ""
    if tier.lower() != ServiceTier.BASIC.lower() and pool.max_size_bytes is not None:
        max_size_bytes = pool.max_size_bytes
        max_size_gb = bytes_to_gb(pool.max_size_bytes)

    return PoolState(
        id=pool.id or "",
        name=pool.name or "",
        resource_group_name=resource_group,
        server_name=server,
        location=normalize_location(pool.location or ""),
        sku=sku,
        per_database_settings=flatten_per_database_settings(pool.per_database_settings),
        max_size_bytes=max_size_bytes,
        max_size_gb=max_size_gb,
        zone_redundant=pool.zone_redundant,
        tags=dict(pool.tags or {}),
        elastic_pool_properties=flatten_properties(pool),
    )
