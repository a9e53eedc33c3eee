"""Subcommand modules for agentpack.

Provides register_commands() which uses deferred imports to keep
``agentpack --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from agentpack.commands.build import build
    from agentpack.commands.locate import locate
    from agentpack.commands.targets import targets

    cli.add_command(build)
    cli.add_command(locate)
    cli.add_command(targets)
