"""SKU name helpers — what a SKU name implies about tier, family and billing.

SKU names encode their tier (``StandardPool`` -> Standard, ``GP_`` ->
GeneralPurpose) and, for vCore pools, their hardware family
(``BC_Gen5`` -> Gen5). All comparisons are case-insensitive.
"""

from __future__ import annotations

from poolctl.domain.types import BillingModel, ServiceTier

VCORE_PREFIXES: tuple[str, ...] = ("gp_", "bc_")

_TIER_PREFIXES: tuple[tuple[str, ServiceTier], ...] = (
    ("basic", ServiceTier.BASIC),
    ("standard", ServiceTier.STANDARD),
    ("premium", ServiceTier.PREMIUM),
    ("gp_", ServiceTier.GENERAL_PURPOSE),
    ("bc_", ServiceTier.BUSINESS_CRITICAL),
)


def billing_model(sku_name: str) -> BillingModel:
    """Classify a SKU name: ``gp_``/``bc_`` prefixes are vCore, everything else DTU."""
    if sku_name.lower().startswith(VCORE_PREFIXES):
        return BillingModel.VCORE
    return BillingModel.DTU


def tier_from_sku_name(sku_name: str) -> str:
    """Return the tier implied by *sku_name*, or ``""`` when it implies none."""
    lowered = sku_name.strip().lower()
    if not lowered:
        return ""
    for prefix, tier in _TIER_PREFIXES:
        if lowered.startswith(prefix):
            return str(tier)
    return ""


def family_from_sku_name(sku_name: str) -> str:
    """Return the hardware family suffix of a vCore SKU name, or ``""``.

    ``GP_Gen5`` -> ``Gen5``. DTU names carry no family.
    """
    if not sku_name.strip() or billing_model(sku_name) is not BillingModel.VCORE:
        return ""
    return sku_name[sku_name.rfind("_") + 1 :]


def name_contains_family(sku_name: str, family: str) -> bool:
    """Check that *family* is spelled inside *sku_name*."""
    if not sku_name.strip() or not family.strip():
        return False
    return family.lower() in sku_name.lower()


def name_matches_tier(sku_name: str, tier: str) -> bool:
    """Check that *tier* is the tier implied by *sku_name*.

    Names that imply no known tier are left to the schema checks and
    are not rejected here.
    """
    if not sku_name.strip() or not tier.strip():
        return False
    expected = tier_from_sku_name(sku_name)
    if not expected:
        return True
    return expected.lower() == tier.strip().lower()
