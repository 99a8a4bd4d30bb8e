"""Resource naming patterns and elastic pool resource IDs.

A pool is addressed locally by ``(resource_group, server, name)`` and
remotely by its ARM resource ID::

    /subscriptions/{sub}/resourceGroups/{rg}/providers/Microsoft.Sql/servers/{server}/elasticPools/{name}

INVARIANT: the address never changes for the lifetime of a pool; renaming
means replacing the resource.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

NAME_PATTERNS: dict[str, re.Pattern[str]] = {
    "elastic_pool": re.compile(r"^[^<>*%&:\\/?]{0,127}[^\s.<>*%&:\\/?]$"),
    "server": re.compile(r"^[0-9a-z]([-0-9a-z]{0,61}[0-9a-z])?$"),
    "resource_group": re.compile(r"^[-\w._()]{0,89}[-\w_()]$"),
}

NAME_RULES: dict[str, str] = {
    "elastic_pool": (
        "must be 1-128 characters, may not contain <>*%&:\\/? and "
        "may not end with a period or whitespace"
    ),
    "server": (
        "can contain only lowercase letters, numbers, and '-', can't start or end "
        "with '-', and can not exceed 63 characters"
    ),
    "resource_group": (
        "must be 1-90 characters of letters, digits, '-', '_', '.', '(' or ')' "
        "and may not end with a period"
    ),
}

PROVIDER_NAMESPACE = "Microsoft.Sql"


class InvalidResourceId(ValueError):
    """Raised when a string is not a parseable elastic pool resource ID."""


def validate_name(value: str, kind: str) -> bool:
    """Check whether *value* is a valid name for resource *kind*."""
    pattern = NAME_PATTERNS.get(kind)
    if pattern is None:
        return False
    return pattern.match(value) is not None


class PoolAddress(BaseModel):
    """Local identity of a pool: the coordinates that key create-or-update."""

    model_config = {"frozen": True}

    resource_group: str
    server: str
    name: str

    def __str__(self) -> str:
        return f"{self.resource_group}/{self.server}/{self.name}"

    @property
    def key(self) -> str:
        """Case-folded address; Azure resource names compare case-insensitively."""
        return str(self).lower()

    @classmethod
    def parse(cls, address: str) -> PoolAddress:
        """Parse ``rg/server/name``."""
        parts = address.split("/")
        if len(parts) != 3 or not all(parts):
            msg = f"Invalid pool address {address!r}, expected 'resource_group/server/name'"
            raise ValueError(msg)
        return cls(resource_group=parts[0], server=parts[1], name=parts[2])


class PoolResourceId(BaseModel):
    """A parsed elastic pool ARM resource ID."""

    model_config = {"frozen": True}

    subscription_id: str
    resource_group: str
    server: str
    name: str

    @property
    def address(self) -> PoolAddress:
        return PoolAddress(resource_group=self.resource_group, server=self.server, name=self.name)

    def __str__(self) -> str:
        return format_pool_id(
            self.subscription_id, self.resource_group, self.server, self.name
        )


def format_pool_id(subscription_id: str, resource_group: str, server: str, name: str) -> str:
    """Build the ARM resource ID for a pool."""
    return (
        f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"
        f"/providers/{PROVIDER_NAMESPACE}/servers/{server}/elasticPools/{name}"
    )


def parse_pool_id(resource_id: str) -> PoolResourceId:
    """Parse an elastic pool resource ID into its components.

    Segment keys (``subscriptions``, ``resourceGroups``, ``servers``,
    ``elasticPools``) are matched case-insensitively, as ARM does.

    Raises:
        InvalidResourceId: if the ID is malformed or not an elastic pool.
    """
    parts = [p for p in resource_id.strip().split("/") if p]
    if len(parts) % 2 != 0:
        msg = f"Unable to parse elastic pool ID {resource_id!r}: odd number of segments"
        raise InvalidResourceId(msg)

    segments: dict[str, str] = {}
    provider: str | None = None
    for key, value in zip(parts[::2], parts[1::2], strict=True):
        lowered = key.lower()
        if lowered == "providers":
            provider = value
            continue
        segments[lowered] = value

    missing = [
        key
        for key in ("subscriptions", "resourcegroups", "servers", "elasticpools")
        if not segments.get(key)
    ]
    if missing or provider is None or provider.lower() != PROVIDER_NAMESPACE.lower():
        msg = (
            f"Unable to parse elastic pool ID {resource_id!r}: "
            f"not a {PROVIDER_NAMESPACE} elastic pool"
        )
        raise InvalidResourceId(msg)

    return PoolResourceId(
        subscription_id=segments["subscriptions"],
        resource_group=segments["resourcegroups"],
        server=segments["servers"],
        name=segments["elasticpools"],
    )
