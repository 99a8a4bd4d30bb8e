"""Click command class shared by all poolctl subcommands.

``PoolCommand`` extends a plain Click command in two ways:

* ``examples=[...]`` adds an eager ``--examples`` flag that prints the
  sample invocations and exits before arguments are checked.
* ``takes_target=True`` appends an epilog explaining how a TARGET
  argument resolves (see ``AppContext.resolve_target``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

TARGET_EPILOG = (
    "TARGET is either a pool definition file or a pool address "
    "'resource_group/server/name'. A path that exists on disk is read as a "
    "definition file first."
)


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    for line in getattr(ctx.command, "examples", ()):
        click.echo(f"  {line}")
    ctx.exit(0)


class PoolCommand(click.Command):
    """Click Command with ``--examples`` and optional TARGET help."""

    def __init__(
        self,
        *args: Any,
        examples: Sequence[str] = (),
        takes_target: bool = False,
        **kwargs: Any,
    ) -> None:
        if takes_target and not kwargs.get("epilog"):
            kwargs["epilog"] = TARGET_EPILOG
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        self.takes_target = takes_target
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )
