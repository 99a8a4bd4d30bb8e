"""Provider-published elastic pool limits.

Pure data: capacity -> maximum pool storage (GB) per tier, and per
tier/family for vCore pools. Keys are lower-cased tier and family names.
Update these tables when Azure publishes new limits; the rules in
:mod:`poolctl.domain.rules` read them and never derive values.
"""

from __future__ import annotations

# --- DTU model: tier -> eDTU capacity -> max pool size (GB) ---

DTU_MAX_SIZE_GB: dict[str, dict[int, float]] = {
    "basic": {
        50: 4.8828125,
        100: 9.765625,
        200: 19.53125,
        300: 29.296875,
        400: 39.0625,
        800: 78.125,
        1200: 117.1875,
        1600: 156.25,
    },
    "standard": {
        50: 500,
        100: 750,
        200: 1024,
        300: 1280,
        400: 1536,
        800: 2048,
        1200: 2560,
        1600: 3072,
        2000: 3584,
        2500: 4096,
        3000: 4096,
    },
    "premium": {
        125: 1024,
        250: 1024,
        500: 1024,
        1000: 1024,
        1500: 1536,
        2000: 2048,
        2500: 2560,
        3000: 3072,
        3500: 3584,
        4000: 4096,
    },
}

# --- vCore model: tier -> family -> vCores -> max pool size (GB) ---

VCORE_MAX_SIZE_GB: dict[str, dict[str, dict[int, float]]] = {
    "generalpurpose": {
        "gen4": {
            1: 512,
            2: 756,
            3: 1536,
            4: 1536,
            5: 1536,
            6: 2048,
            7: 2048,
            8: 2048,
            9: 2048,
            10: 2048,
            16: 3584,
            24: 4096,
        },
        "gen5": {
            2: 512,
            4: 756,
            6: 1536,
            8: 1536,
            10: 1536,
            12: 2048,
            14: 2048,
            16: 2048,
            18: 3072,
            20: 3072,
            24: 3072,
            32: 4096,
            40: 4096,
            80: 4096,
        },
    },
    "businesscritical": {
        "gen4": {
            2: 1024,
            3: 1024,
            4: 1024,
            5: 1024,
            6: 1024,
            7: 1024,
            8: 1024,
            9: 1024,
            10: 1024,
            16: 1024,
            24: 1024,
        },
        "gen5": {
            4: 1024,
            6: 1536,
            8: 1536,
            10: 1536,
            12: 3072,
            14: 3072,
            16: 3072,
            18: 3072,
            20: 3072,
            24: 4096,
            32: 4096,
            40: 4096,
            80: 4096,
        },
    },
}

# --- DTU model: selectable max sizes for Standard and Premium pools (GB) ---

DTU_SIZE_INCREMENTS_GB: frozenset[float] = frozenset(
    {
        50,
        100,
        150,
        200,
        250,
        300,
        400,
        500,
        750,
        800,
        1024,
        1200,
        1280,
        1536,
        1600,
        1792,
        2000,
        2048,
        2304,
        2500,
        2560,
        2816,
        3000,
        3072,
        3328,
        3584,
        3840,
        4096,
    }
)

DTU_MIN_SIZE_GB = 50
VCORE_MIN_SIZE_GB = 5


def dtu_max_size_gb(tier: str, capacity: int) -> float | None:
    """Max pool size for a DTU *tier* at *capacity* eDTUs, or None if unsupported."""
    return DTU_MAX_SIZE_GB.get(tier.lower(), {}).get(capacity)


def vcore_max_size_gb(tier: str, family: str, capacity: int) -> float | None:
    """Max pool size for a vCore *tier*/*family* at *capacity* vCores, or None."""
    return VCORE_MAX_SIZE_GB.get(tier.lower(), {}).get(family.lower(), {}).get(capacity)


def dtu_capacities(tier: str) -> list[int]:
    """Supported eDTU capacities for *tier*, ascending."""
    return sorted(DTU_MAX_SIZE_GB.get(tier.lower(), {}))


def vcore_capacities(tier: str, family: str) -> list[int]:
    """Supported vCore counts for *tier*/*family*, ascending."""
    return sorted(VCORE_MAX_SIZE_GB.get(tier.lower(), {}).get(family.lower(), {}))
