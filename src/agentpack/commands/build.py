"""Command: build one target's output tree, or all of them."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from agentpack.commands._base import PackCommand
from agentpack.domain.targets import TARGET_CHOICES

if TYPE_CHECKING:
    from agentpack.commands._context import AppContext

_BUILD_EXAMPLES = """\
  agentpack build cursor
  agentpack build claude --out dist/claude
  agentpack build all --force
  agentpack -C ~/prompts --json build opencode"""


def _non_empty_path(_ctx: click.Context, _param: click.Parameter, value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise click.BadParameter("requires a directory path")
    return value


@click.command("build", cls=PackCommand, examples=_BUILD_EXAMPLES)
@click.argument("target", type=click.Choice(TARGET_CHOICES, case_sensitive=False))
@click.option(
    "--out",
    "out_dir",
    default=None,
    callback=_non_empty_path,
    help="Output directory (with 'all': parent of one directory per target).",
)
@click.option("--force", is_flag=True, help="Overwrite an existing output directory.")
@click.pass_obj
def build(app: AppContext, target: str, out_dir: str | None, force: bool) -> None:
    """Build a ready-to-move tree for TARGET (cursor, claude, opencode, or all)."""
    from agentpack.services.build import BuildService

    payload = app.resolve_payload("build_all" if target.lower() == "all" else "build")
    app.emit(
        BuildService(app.settings).build_targets(
            payload,
            target.lower(),
            out_dir=Path(out_dir) if out_dir is not None else None,
            force=force or app.settings.build.force,
        )
    )
