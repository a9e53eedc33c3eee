"""Click classes shared by every agentpack command.

Commands take an ``examples`` string (one invocation per line) shown by an
eager ``--examples`` flag, which keeps ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def format_examples(examples: str) -> str:
    """Normalise an examples block to ``  $ <invocation>`` lines."""
    lines = (line.strip() for line in examples.strip().splitlines())
    return "\n".join(f"  $ {line.removeprefix('$ ')}" for line in lines if line)


def _attach_examples(cmd: click.Command, examples: str | None) -> None:
    cmd.examples = examples  # type: ignore[attr-defined]
    if not examples:
        return

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(examples))
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples and exit.",
        )
    )


class PackCommand(click.Command):
    """Click Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        _attach_examples(self, examples)


class PackGroup(click.Group):
    """Root group: ``--examples`` support, PackCommand subcommands.

    Subcommands are listed in registration order (build, locate, targets)
    rather than alphabetically, so ``--help`` leads with the main command.
    """

    command_class = PackCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        _attach_examples(self, examples)

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)
