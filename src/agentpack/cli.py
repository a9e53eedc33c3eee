"""Root CLI group for agentpack with global flags and command registration."""

from __future__ import annotations

import click

from agentpack import __version__
from agentpack.commands import register_commands
from agentpack.commands._base import PackGroup
from agentpack.commands._context import AppContext
from agentpack.config.settings import PackSettings


_CLI_EXAMPLES = """\
  agentpack build all
  agentpack -C ~/prompts build claude --out ~/.claude-pack
  agentpack --json locate
  agentpack targets"""


@click.group(
    cls=PackGroup,
    examples=_CLI_EXAMPLES,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="agentpack")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--directory",
    "start_dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Start the source search here instead of the current directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    start_dir: str | None,
) -> None:
    """agentpack — copy AGENTS.md and command prompts into AI tool layouts."""
    settings = PackSettings.from_cli(
        config_path=config_path,
        start_dir=start_dir,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    cli()
