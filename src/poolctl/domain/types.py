"""SKU, tier and hardware-family enums for elastic pools.

Values are the canonical casing used by the Azure Resource Manager API.
User input is matched case-insensitively against them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeVar


class SkuName(StrEnum):
    """Purchasable elastic pool SKU names."""

    BASIC_POOL = "BasicPool"
    STANDARD_POOL = "StandardPool"
    PREMIUM_POOL = "PremiumPool"
    GP_GEN4 = "GP_Gen4"
    GP_GEN5 = "GP_Gen5"
    BC_GEN4 = "BC_Gen4"
    BC_GEN5 = "BC_Gen5"


class ServiceTier(StrEnum):
    """Service tiers an elastic pool SKU belongs to."""

    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"
    GENERAL_PURPOSE = "GeneralPurpose"
    BUSINESS_CRITICAL = "BusinessCritical"


class HardwareFamily(StrEnum):
    """vCore hardware generations."""

    GEN4 = "Gen4"
    GEN5 = "Gen5"


class BillingModel(StrEnum):
    """Purchasing models. The two never mix within one pool."""

    DTU = "dtu"
    VCORE = "vcore"


_E = TypeVar("_E", bound=StrEnum)


def match_member(enum_cls: type[_E], value: str) -> _E | None:
    """Return the member of *enum_cls* equal to *value* ignoring case, or None."""
    lowered = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == lowered:
            return member
    return None
