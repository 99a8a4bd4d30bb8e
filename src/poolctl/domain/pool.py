"""Elastic pool configuration and state models.

:class:`PoolConfig` is the desired configuration read from a definition
file. :class:`PoolState` is remote truth as last read from Azure; reads
overwrite it wholesale, it is never pushed back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from poolctl.domain.ids import NAME_RULES, PoolAddress, validate_name
from poolctl.domain.sizing import SizeSpec
from poolctl.domain.types import HardwareFamily, ServiceTier, SkuName, match_member

MAX_TAGS = 50
MAX_TAG_KEY_LENGTH = 512
MAX_TAG_VALUE_LENGTH = 256


def normalize_location(location: str) -> str:
    """Normalize an Azure location (``West Europe`` -> ``westeurope``)."""
    return location.replace(" ", "").lower()


class PoolSku(BaseModel):
    """Purchasing identity of a pool."""

    model_config = {"frozen": True}

    name: str
    tier: str
    family: str = ""
    capacity: int = Field(ge=0)


class PerDatabaseSettings(BaseModel):
    """Capacity bounds applied to each database in the pool."""

    model_config = {"frozen": True}

    min_capacity: float = Field(ge=0.0)
    max_capacity: float = Field(ge=0.0)


class PoolConfig(BaseModel):
    """Desired elastic pool configuration (one definition file)."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    resource_group_name: str
    server_name: str
    location: str
    sku: PoolSku
    per_database_settings: PerDatabaseSettings
    max_size_bytes: int | None = Field(default=None, ge=0)
    max_size_gb: float | None = Field(default=None, ge=0.0)
    tags: dict[str, str] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _check_pool_name(cls, value: str) -> str:
        if not validate_name(value, "elastic_pool"):
            msg = f"name {value!r} {NAME_RULES['elastic_pool']}"
            raise ValueError(msg)
        return value

    @field_validator("server_name")
    @classmethod
    def _check_server_name(cls, value: str) -> str:
        if not validate_name(value, "server"):
            msg = f"server_name {value!r} {NAME_RULES['server']}"
            raise ValueError(msg)
        return value

    @field_validator("resource_group_name")
    @classmethod
    def _check_resource_group(cls, value: str) -> str:
        if not validate_name(value, "resource_group"):
            msg = f"resource_group_name {value!r} {NAME_RULES['resource_group']}"
            raise ValueError(msg)
        return value

    @field_validator("location")
    @classmethod
    def _normalize_location(cls, value: str) -> str:
        normalized = normalize_location(value)
        if not normalized:
            raise ValueError("location must not be empty")
        return normalized

    @field_validator("sku")
    @classmethod
    def _check_sku_values(cls, sku: PoolSku) -> PoolSku:
        if match_member(SkuName, sku.name) is None:
            allowed = ", ".join(m.value for m in SkuName)
            msg = f"sku.name {sku.name!r} is not one of: {allowed}"
            raise ValueError(msg)
        if match_member(ServiceTier, sku.tier) is None:
            allowed = ", ".join(m.value for m in ServiceTier)
            msg = f"sku.tier {sku.tier!r} is not one of: {allowed}"
            raise ValueError(msg)
        if sku.family and match_member(HardwareFamily, sku.family) is None:
            allowed = ", ".join(m.value for m in HardwareFamily)
            msg = f"sku.family {sku.family!r} is not one of: {allowed}"
            raise ValueError(msg)
        return sku

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, tags: dict[str, str]) -> dict[str, str]:
        if len(tags) > MAX_TAGS:
            msg = f"a maximum of {MAX_TAGS} tags can be applied, got {len(tags)}"
            raise ValueError(msg)
        for key, value in tags.items():
            if len(key) > MAX_TAG_KEY_LENGTH:
                msg = f"tag key {key[:32]!r}... exceeds {MAX_TAG_KEY_LENGTH} characters"
                raise ValueError(msg)
            if len(value) > MAX_TAG_VALUE_LENGTH:
                msg = f"tag {key!r} value exceeds {MAX_TAG_VALUE_LENGTH} characters"
                raise ValueError(msg)
        return tags

    @model_validator(mode="after")
    def _check_size_exclusive(self) -> PoolConfig:
        if self.max_size_bytes is not None and self.max_size_gb is not None:
            raise ValueError("max_size_bytes conflicts with max_size_gb, set only one")
        return self

    @property
    def address(self) -> PoolAddress:
        return PoolAddress(
            resource_group=self.resource_group_name,
            server=self.server_name,
            name=self.name,
        )

    @property
    def size(self) -> SizeSpec:
        return SizeSpec(max_size_bytes=self.max_size_bytes, max_size_gb=self.max_size_gb)


class ElasticPoolProperties(BaseModel):
    """Legacy computed block.

    Deprecated: ``max_size_bytes`` and ``zone_redundant`` moved to the top
    level; ``state``, ``creation_date`` and ``license_type`` are kept for
    existing consumers only.
    """

    model_config = {"frozen": True}

    state: str = ""
    creation_date: str = ""
    max_size_bytes: int | None = None
    zone_redundant: bool | None = None
    license_type: str = ""


class PoolState(BaseModel):
    """Remote truth for a tracked pool."""

    model_config = {"frozen": True}

    id: str
    name: str
    resource_group_name: str
    server_name: str
    location: str = ""
    sku: PoolSku | None = None
    per_database_settings: PerDatabaseSettings | None = None
    max_size_bytes: int | None = None
    max_size_gb: float | None = None
    zone_redundant: bool | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    elastic_pool_properties: ElasticPoolProperties | None = None

    @property
    def address(self) -> PoolAddress:
        return PoolAddress(
            resource_group=self.resource_group_name,
            server=self.server_name,
            name=self.name,
        )

    @property
    def size(self) -> SizeSpec:
        return SizeSpec(max_size_bytes=self.max_size_bytes, max_size_gb=self.max_size_gb)

    def summary(self) -> dict[str, Any]:
        """Flat view for list output."""
        return {
            "address": str(self.address),
            "id": self.id,
            "sku": self.sku.name if self.sku else "",
            "tier": self.sku.tier if self.sku else "",
            "capacity": self.sku.capacity if self.sku else None,
            "max_size_gb": self.max_size_gb,
            "location": self.location,
        }
