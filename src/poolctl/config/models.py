"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, poolctl.toml only contains
overrides. Most projects need nothing but ``[azure] subscription_id``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AzureConfig(BaseModel):
    """[azure] section."""

    model_config = {"frozen": True}

    subscription_id: str | None = None
    prefer_cli_credential: bool = False


class ProviderConfig(BaseModel):
    """[provider] section."""

    model_config = {"frozen": True}

    # Refuse to create a pool that already exists remotely; it must be
    # adopted with ``poolctl import`` first.
    require_import: bool = True


class PollingConfig(BaseModel):
    """[polling] section."""

    model_config = {"frozen": True}

    timeout_seconds: float = Field(default=3600.0, gt=0)


class StateConfig(BaseModel):
    """[state] section."""

    model_config = {"frozen": True}

    directory: str = ".poolctl"
