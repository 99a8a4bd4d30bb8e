"""Command: list tracked pools."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    "list",
    cls=PoolCommand,
    examples=["poolctl list", "poolctl -q list", "poolctl --json list"],
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List pools tracked in local state (no Azure calls)."""
    from poolctl.services.pool import PoolService

    app.emit(PoolService(app.workspace).list_pools())
