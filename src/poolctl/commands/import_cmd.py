"""Command: adopt an existing elastic pool into local state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    "import",
    cls=PoolCommand,
    examples=[
        "poolctl import /subscriptions/00000000-0000-0000-0000-000000000000"
        "/resourceGroups/rg-sql/providers/Microsoft.Sql/servers/sql-srv-1"
        "/elasticPools/pool-1",
    ],
)
@click.argument("resource_id")
@click.pass_obj
def import_cmd(app: AppContext, resource_id: str) -> None:
    """Start tracking an existing pool by its Azure RESOURCE_ID."""
    from poolctl.services.pool import PoolService

    app.emit(PoolService(app.workspace).import_pool(resource_id))
