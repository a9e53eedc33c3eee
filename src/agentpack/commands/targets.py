"""Command: list the supported targets and where each puts the payload."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agentpack.commands._base import PackCommand

if TYPE_CHECKING:
    from agentpack.commands._context import AppContext


@click.command(cls=PackCommand, examples="  agentpack targets\n  agentpack --json targets")
@click.pass_obj
def targets(app: AppContext) -> None:
    """List target layouts."""
    from agentpack.services.build import BuildService

    app.emit(BuildService(app.settings).describe_layouts())
