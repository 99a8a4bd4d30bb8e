"""Pool storage sizing — bytes/GB conversion and size-field precedence.

A pool's max size can be given either as ``max_size_bytes`` or as
``max_size_gb``. Whichever field changed since the last known state is
authoritative; the other one is derived from it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

GIB = 1024 * 1024 * 1024


class SizeField(StrEnum):
    """The two ways a pool size can be expressed."""

    BYTES = "max_size_bytes"
    GB = "max_size_gb"


class SizeSpec(BaseModel):
    """A pool size as known at one point in time. Either field may be unset."""

    model_config = {"frozen": True}

    max_size_bytes: int | None = None
    max_size_gb: float | None = None


def bytes_to_gb(size_bytes: int) -> float:
    """Whole gigabytes in *size_bytes* (integer division by 2^30)."""
    return float(size_bytes // GIB)


def gb_to_bytes(size_gb: float) -> int:
    """Bytes for *size_gb*, truncated to an integer."""
    return int(size_gb * GIB)


def changed_size_field(prior: SizeSpec | None, desired: SizeSpec) -> SizeField | None:
    """Return which size field the desired configuration changes, if any.

    A field counts as changed when it is set in *desired* and differs from
    *prior* (or there is no prior state). ``max_size_gb`` wins when both do.
    """
    if desired.max_size_gb is not None and (
        prior is None or desired.max_size_gb != prior.max_size_gb
    ):
        return SizeField.GB
    if desired.max_size_bytes is not None and (
        prior is None or desired.max_size_bytes != prior.max_size_bytes
    ):
        return SizeField.BYTES
    return None


def _effective(prior: SizeSpec | None, desired: SizeSpec) -> tuple[int | None, float | None]:
    """Merge configured values over prior computed ones, field by field."""
    size_bytes = desired.max_size_bytes
    size_gb = desired.max_size_gb
    if prior is not None:
        if size_bytes is None:
            size_bytes = prior.max_size_bytes
        if size_gb is None:
            size_gb = prior.max_size_gb
    return size_bytes, size_gb


def resolve_max_size_gb(
    prior: SizeSpec | None,
    desired: SizeSpec,
    changed: SizeField | None,
) -> float:
    """Return the max size in GB the validation rules should check.

    Known bytes drive the value unless ``max_size_gb`` itself changed.
    Unknown size resolves to 0.
    """
    size_bytes, size_gb = _effective(prior, desired)
    if size_bytes and changed is not SizeField.GB:
        return bytes_to_gb(size_bytes)
    return size_gb or 0.0


def resolve_max_size_bytes(
    prior: SizeSpec | None,
    desired: SizeSpec,
    changed: SizeField | None,
) -> int | None:
    """Return the max size in bytes to submit, or None to leave it to the service."""
    size_bytes, size_gb = _effective(prior, desired)
    if changed is SizeField.GB:
        if size_gb:
            return gb_to_bytes(size_gb)
        return None
    return size_bytes or None
