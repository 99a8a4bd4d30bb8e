"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Workspace initialization, definition
loading and centralized result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from poolctl.output.formatters import OutputSettings, format_result
from poolctl.services.result import ServiceResult

if TYPE_CHECKING:
    from poolctl.config.settings import PoolSettings
    from poolctl.domain.ids import PoolAddress
    from poolctl.domain.pool import PoolConfig
    from poolctl.infrastructure.workspace import Workspace


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The workspace is lazily
    initialized on first use so ``--help`` and ``--version`` never
    touch the state database or Azure.
    """

    def __init__(self, settings: PoolSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        # Configure structured logging
        from poolctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from poolctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from poolctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def load_definition(self, op: str, path: str) -> PoolConfig:
        """Load a definition file, emitting ``INVALID_DEFINITION`` on failure."""
        from poolctl.infrastructure.definitions import DefinitionError, load_definition

        try:
            return load_definition(Path(path))
        except DefinitionError as exc:
            self.emit(
                ServiceResult.failure(
                    op,
                    "INVALID_DEFINITION",
                    str(exc),
                    {"path": str(exc.path), "errors": exc.errors},
                )
            )
            raise  # unreachable: emit() exits on failure

    def resolve_target(self, op: str, target: str) -> PoolAddress:
        """Resolve a definition file path or ``rg/server/name`` to an address.

        A path that exists on disk wins over the address form.
        """
        from poolctl.domain.ids import PoolAddress

        if Path(target).is_file():
            return self.load_definition(op, target).address
        try:
            return PoolAddress.parse(target)
        except ValueError as exc:
            self.emit(ServiceResult.failure(op, "INVALID_TARGET", str(exc), {"target": target}))
            raise  # unreachable: emit() exits on failure

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
