"""Elastic pool validation rules.

Decides whether a SKU name, tier, family, capacity, per-database capacity
range and pool size form a configuration Azure will accept. The two
billing models have disjoint rule sets:

- DTU (``BasicPool``, ``StandardPool``, ``PremiumPool``): eDTU capacity
  picks a size ceiling; Basic sizes are fixed, Standard/Premium sizes come
  from a fixed list of increments; per-database capacities are whole eDTUs.
- vCore (``GP_*``, ``BC_*``): tier, hardware family and vCore count pick a
  size ceiling; the family must agree with the SKU name; per-database
  capacities are bounded by the pool's vCores.

After the model-specific rules, every SKU must name a tier consistent
with its SKU name.

INVARIANT: rules are evaluated in a fixed order and the first violation
is returned. No rule ever consults the network.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from poolctl.domain.limits import (
    DTU_MIN_SIZE_GB,
    DTU_SIZE_INCREMENTS_GB,
    VCORE_MIN_SIZE_GB,
    dtu_capacities,
    dtu_max_size_gb,
    vcore_capacities,
    vcore_max_size_gb,
)
from poolctl.domain.pool import PerDatabaseSettings, PoolConfig, PoolSku
from poolctl.domain.sizing import SizeSpec, changed_size_field, resolve_max_size_gb
from poolctl.domain.sku import (
    billing_model,
    family_from_sku_name,
    name_contains_family,
    name_matches_tier,
    tier_from_sku_name,
)
from poolctl.domain.types import BillingModel, SkuName


class RuleViolation(BaseModel):
    """A failed validation rule, reported to the user as-is."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


RuleSet = Callable[[PoolSku, PerDatabaseSettings, float], RuleViolation | None]


def _join_choices(values: list[int]) -> str:
    """``[1, 2, 3]`` -> ``"1, 2 or 3"``."""
    rendered = [str(v) for v in values]
    if len(rendered) < 2:
        return "".join(rendered)
    return f"{', '.join(rendered[:-1])} or {rendered[-1]}"


def _is_whole(value: float) -> bool:
    return value == math.trunc(value)


# ---------------------------------------------------------------------------
# DTU model
# ---------------------------------------------------------------------------


def _check_dtu(
    sku: PoolSku, per_db: PerDatabaseSettings, max_size_gb: float
) -> RuleViolation | None:
    tier = tier_from_sku_name(sku.name)
    is_basic = sku.name.lower() == SkuName.BASIC_POOL.lower()
    detail: dict[str, Any] = {
        "sku_name": sku.name,
        "tier": tier,
        "capacity": sku.capacity,
        "max_size_gb": max_size_gb,
    }

    max_allowed = dtu_max_size_gb(tier, sku.capacity)
    if max_allowed is None:
        capacities = dtu_capacities(tier)
        if capacities:
            message = (
                f"service tier '{tier}' must have a 'capacity'({sku.capacity}) "
                f"of {_join_choices(capacities)} DTUs"
            )
        else:
            message = f"SKU name '{sku.name}' does not name a DTU service tier"
        return RuleViolation(
            code="DTU_CAPACITY_UNSUPPORTED",
            message=message,
            detail={**detail, "supported_capacities": capacities},
        )

    detail["max_allowed_gb"] = max_allowed
    if is_basic:
        # Basic pools cannot pick a size, it follows from the eDTU count.
        if max_size_gb != max_allowed:
            return RuleViolation(
                code="BASIC_MAX_SIZE_FIXED",
                message=(
                    f"service tier 'Basic' with a 'capacity' of {sku.capacity} must have "
                    f"a 'max_size_gb' of {max_allowed:.7f} GB, got {max_size_gb:.7f} GB"
                ),
                detail=detail,
            )
    elif max_size_gb > max_allowed:
        return RuleViolation(
            code="DTU_MAX_SIZE_EXCEEDED",
            message=(
                f"service tier '{tier}' with a 'capacity' of {sku.capacity} must have "
                f"a 'max_size_gb' no greater than {int(max_allowed)} GB, "
                f"got {int(max_size_gb)} GB"
            ),
            detail=detail,
        )

    if not is_basic:
        if int(max_size_gb) < DTU_MIN_SIZE_GB:
            return RuleViolation(
                code="DTU_MAX_SIZE_TOO_SMALL",
                message=(
                    f"service tier '{tier}', must have a 'max_size_gb' value equal to or "
                    f"greater than {DTU_MIN_SIZE_GB} GB, got {int(max_size_gb)} GB"
                ),
                detail=detail,
            )
        if max_size_gb not in DTU_SIZE_INCREMENTS_GB:
            increments = _join_choices(sorted(int(v) for v in DTU_SIZE_INCREMENTS_GB))
            return RuleViolation(
                code="DTU_MAX_SIZE_INCREMENT",
                message=(
                    f"'max_size_gb'({int(max_size_gb)}) is not a valid value for service "
                    f"tier '{tier}', 'max_size_gb' must have a value of {increments}"
                ),
                detail=detail,
            )

    if sku.family:
        return RuleViolation(
            code="FAMILY_NOT_APPLICABLE",
            message=(
                f"invalid attribute 'family' ({sku.family}) for service tiers 'Basic', "
                "'Standard', and 'Premium', remove the 'family' attribute"
            ),
            detail={**detail, "family": sku.family},
        )

    capacities = {"min_capacity": per_db.min_capacity, "max_capacity": per_db.max_capacity}
    for field_name, value in capacities.items():
        if not _is_whole(value):
            return RuleViolation(
                code=f"{field_name.upper()}_NOT_WHOLE",
                message=(
                    "service tiers 'Basic', 'Standard', and 'Premium' must have whole "
                    f"numbers as their per_database_settings '{field_name}', got {value}"
                ),
                detail={**detail, **capacities},
            )

    if per_db.min_capacity < 0.0:
        return RuleViolation(
            code="MIN_CAPACITY_NEGATIVE",
            message=(
                "service tiers 'Basic', 'Standard', and 'Premium' per_database_settings "
                f"'min_capacity' must be equal to or greater than zero, got {per_db.min_capacity}"
            ),
            detail={**detail, **capacities},
        )
    return None


# ---------------------------------------------------------------------------
# vCore model
# ---------------------------------------------------------------------------


def _check_vcore(
    sku: PoolSku, per_db: PerDatabaseSettings, max_size_gb: float
) -> RuleViolation | None:
    tier = tier_from_sku_name(sku.name)
    name_family = family_from_sku_name(sku.name)
    detail: dict[str, Any] = {
        "sku_name": sku.name,
        "tier": tier,
        "family": sku.family,
        "capacity": sku.capacity,
        "max_size_gb": max_size_gb,
    }

    max_allowed = vcore_max_size_gb(tier, sku.family, sku.capacity)
    if max_allowed is None:
        capacities = vcore_capacities(tier, name_family)
        return RuleViolation(
            code="VCORE_CAPACITY_UNSUPPORTED",
            message=(
                f"service tier '{tier}' {name_family} must have a 'capacity'({sku.capacity}) "
                f"of {_join_choices(capacities)} vCores"
                + ("" if sku.family else ", and 'family' must be set")
            ),
            detail={**detail, "supported_capacities": capacities},
        )

    detail["max_allowed_gb"] = max_allowed
    if max_size_gb > max_allowed:
        return RuleViolation(
            code="VCORE_MAX_SIZE_EXCEEDED",
            message=(
                f"service tier '{tier}' {sku.family} with a 'capacity' of {sku.capacity} "
                f"vCores must have a 'max_size_gb' between {VCORE_MIN_SIZE_GB} GB and "
                f"{int(max_allowed)} GB, got {int(max_size_gb)} GB"
            ),
            detail=detail,
        )

    if int(max_size_gb) < VCORE_MIN_SIZE_GB:
        return RuleViolation(
            code="VCORE_MAX_SIZE_TOO_SMALL",
            message=(
                f"service tier '{tier}' must have a 'max_size_gb' value equal to or "
                f"greater than {VCORE_MIN_SIZE_GB} GB, got {int(max_size_gb)} GB"
            ),
            detail=detail,
        )

    if not _is_whole(max_size_gb):
        return RuleViolation(
            code="MAX_SIZE_NOT_WHOLE",
            message=f"'max_size_gb' must be a whole number, got {max_size_gb:f} GB",
            detail=detail,
        )

    if not name_contains_family(sku.name, sku.family):
        return RuleViolation(
            code="SKU_FAMILY_MISMATCH",
            message=(
                f"mismatch between SKU name '{sku.name}' and family '{sku.family}', "
                f"expected '{name_family}'"
            ),
            detail={**detail, "expected_family": name_family},
        )

    capacities = {"min_capacity": per_db.min_capacity, "max_capacity": per_db.max_capacity}
    if per_db.max_capacity > sku.capacity:
        return RuleViolation(
            code="MAX_CAPACITY_EXCEEDS_SKU",
            message=(
                f"service tier '{tier}' per_database_settings 'max_capacity'"
                f"({per_db.max_capacity:g}) must not be higher than the SKU's "
                f"'capacity'({sku.capacity}) value"
            ),
            detail={**detail, **capacities},
        )

    if per_db.min_capacity > per_db.max_capacity:
        return RuleViolation(
            code="MIN_CAPACITY_EXCEEDS_MAX",
            message=(
                f"per_database_settings 'max_capacity'({per_db.max_capacity:g}) must be "
                f"greater than or equal to 'min_capacity'({per_db.min_capacity:g})"
            ),
            detail={**detail, **capacities},
        )
    return None


_MODEL_RULES: dict[BillingModel, RuleSet] = {
    BillingModel.DTU: _check_dtu,
    BillingModel.VCORE: _check_vcore,
}


def _check_tier(sku: PoolSku) -> RuleViolation | None:
    if name_matches_tier(sku.name, sku.tier):
        return None
    expected = tier_from_sku_name(sku.name)
    return RuleViolation(
        code="SKU_TIER_MISMATCH",
        message=(
            f"mismatch between SKU name '{sku.name}' and tier '{sku.tier}', "
            f"expected 'tier' to be '{expected}'"
        ),
        detail={"sku_name": sku.name, "tier": sku.tier, "expected_tier": expected},
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def check_pool(
    sku: PoolSku,
    per_database_settings: PerDatabaseSettings,
    max_size_gb: float,
) -> RuleViolation | None:
    """Run every rule against an already-resolved size in GB.

    Returns the first violation, or None when the combination is valid.
    """
    rules = _MODEL_RULES[billing_model(sku.name)]
    violation = rules(sku, per_database_settings, max_size_gb)
    if violation is not None:
        return violation
    return _check_tier(sku)


def validate_pool(config: PoolConfig, *, prior: SizeSpec | None = None) -> RuleViolation | None:
    """Validate a desired pool configuration.

    Args:
        config: The desired configuration.
        prior: Size as last read from Azure, if the pool is already tracked.
            Decides whether configured bytes or configured GB drive the
            checked size.
    """
    desired = config.size
    changed = changed_size_field(prior, desired)
    max_size_gb = resolve_max_size_gb(prior, desired, changed)
    return check_pool(config.sku, config.per_database_settings, max_size_gb)
