"""Command: delete a tracked elastic pool."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    cls=PoolCommand,
    examples=[
        "poolctl destroy pools/standard.toml",
        "poolctl destroy rg-sql/sql-srv-1/pool-1 --yes",
    ],
    takes_target=True,
)
@click.argument("target")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def destroy(app: AppContext, target: str, yes: bool) -> None:
    """Delete a tracked pool."""
    from poolctl.services.pool import PoolService

    address = app.resolve_target("destroy", target)
    if not yes:
        click.confirm(f"Delete elastic pool {address}?", abort=True, err=True)
    app.emit(PoolService(app.workspace).delete(address))
