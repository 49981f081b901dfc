from __future__ import annotations

import click
import rich_click

import labelexpr

from .context import CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="labelexpr",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"]),
    default="table",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option(
    "--max-depth",
    type=int,
    default=None,
    envvar="LABELEXPR_MAX_DEPTH",
    show_envvar=True,
    help="Maximum nesting depth accepted by the parser.",
)
@click.option(
    "--lenient",
    is_flag=True,
    envvar="LABELEXPR_LENIENT",
    show_envvar=True,
    help="Ignore a stray ')' after the expression instead of failing.",
)
@click.version_option(version=labelexpr.__version__, prog_name="labelexpr")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    max_depth: int | None,
    lenient: bool,
) -> None:
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    out = "json" if json_flag else output

    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        max_depth=max_depth,
        lenient=lenient,
    )

    previous_logging = configure_logging(verbosity=verbose)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.parse_cmd import parse_cmd as _parse_cmd  # noqa: E402
from .commands.tokens_cmd import tokens_cmd as _tokens_cmd  # noqa: E402

cli.add_command(_parse_cmd)
cli.add_command(_tokens_cmd)
