"""Command: validate a pool definition offline."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from poolctl.commands._base import PoolCommand

if TYPE_CHECKING:
    from poolctl.commands._context import AppContext


@click.command(
    cls=PoolCommand,
    examples=[
        "poolctl validate pools/standard.toml",
        "poolctl --json validate pools/gp-gen5.toml",
        "poolctl -v validate pools/basic.toml",
    ],
)
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_obj
def validate(app: AppContext, file: str) -> None:
    """Check a pool definition against the elastic pool rules (no Azure calls)."""
    from poolctl.services.validate import ValidationService

    config = app.load_definition("validate", file)
    app.emit(ValidationService(app.workspace).validate(config))
