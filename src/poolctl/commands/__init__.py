"""Subcommand modules for poolctl.

Provides register_commands() which uses deferred imports to keep
``poolctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from poolctl.commands.apply import apply
    from poolctl.commands.destroy import destroy
    from poolctl.commands.import_cmd import import_cmd
    from poolctl.commands.list_cmd import list_cmd
    from poolctl.commands.show import show
    from poolctl.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(apply)
    cli.add_command(show)
    cli.add_command(destroy)
    cli.add_command(import_cmd)
    cli.add_command(list_cmd)
