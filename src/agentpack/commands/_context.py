"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Owns logging setup, payload resolution, and result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agentpack.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from agentpack.config.settings import PackSettings
    from agentpack.domain.payload import PayloadRoot
    from agentpack.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PackSettings) -> None:
        self.settings = settings

        from agentpack.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from agentpack.services.telemetry import enable_telemetry

            enable_telemetry()

    def resolve_payload(self, op: str) -> PayloadRoot:
        """Resolve the payload root, emitting a failed *op* result if there is none."""
        from agentpack.domain.errors import ResolutionError
        from agentpack.services.result import ServiceResult
        from agentpack.services.source import SourceService

        try:
            return SourceService(self.settings).payload()
        except ResolutionError as exc:
            self.emit(ServiceResult.failure(op, exc))
            raise  # emit() exits; unreachable

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
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
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
