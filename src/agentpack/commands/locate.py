"""Command: show which directory would be used as the payload source."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agentpack.commands._base import PackCommand

if TYPE_CHECKING:
    from agentpack.commands._context import AppContext


@click.command(
    cls=PackCommand,
    examples="""\
  agentpack locate
  agentpack -v locate
  agentpack -C ../prompts --json locate""",
)
@click.pass_obj
def locate(app: AppContext) -> None:
    """Resolve the source directory (AGENTS.md + commands/*.md)."""
    from agentpack.services.source import SourceService

    app.emit(SourceService(app.settings).resolve(include_candidates=app.settings.verbose))
