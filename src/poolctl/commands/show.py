"""Command: refresh a tracked pool from Azure and print it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    cls=PoolCommand,
    examples=[
        "poolctl show pools/standard.toml",
        "poolctl show rg-sql/sql-srv-1/pool-1",
        "poolctl --json show rg-sql/sql-srv-1/pool-1",
    ],
    takes_target=True,
)
@click.argument("target")
@click.pass_obj
def show(app: AppContext, target: str) -> None:
    """Refresh and print a tracked pool."""
    from poolctl.services.pool import PoolService

    address = app.resolve_target("show", target)
    app.emit(PoolService(app.workspace).read(address))
