"""Command: create or update an elastic pool from a definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    cls=PoolCommand,
    examples=[
        "poolctl apply pools/standard.toml",
        "poolctl -v apply pools/gp-gen5.toml",
        "poolctl --json apply pools/standard.toml",
    ],
)
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_obj
def apply(app: AppContext, file: str) -> None:
    """Create the pool in FILE, or update it if it is already tracked.

    Blocks until Azure finishes the operation (bounded by
    ``polling.timeout_seconds``).
    """
    from poolctl.services.pool import PoolService

    config = app.load_definition("apply", file)
    app.emit(PoolService(app.workspace).apply(config))
