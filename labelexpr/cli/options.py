from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _override(attr: str, *, value_for: Callable[[Any], Any] | None = None) -> Callable[..., Any]:
    """Build a callback that copies an explicitly given option onto the CLIContext."""

    def callback(ctx: click.Context, _param: click.Parameter, value: Any) -> Any:
        if value is None or value is False:
            return value
        obj = ctx.obj
        if isinstance(obj, CLIContext):
            setattr(obj, attr, value_for(value) if value_for else value)
        return value

    return callback


def output_options(fn: F) -> F:
    fn = click.option(
        "--output",
        type=click.Choice(["table", "json"]),
        default=None,
        help="Override output format for this command.",
        callback=_override("output"),
        expose_value=False,
    )(fn)
    fn = click.option(
        "--json",
        is_flag=True,
        help="Alias for --output json.",
        callback=_override("output", value_for=lambda _: "json"),
        expose_value=False,
    )(fn)
    return fn


def parser_options(fn: F) -> F:
    """Per-command `--max-depth` / `--lenient`, overriding the group-level values."""
    fn = click.option(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum nesting depth for this command.",
        callback=_override("max_depth"),
        expose_value=False,
    )(fn)
    fn = click.option(
        "--lenient",
        is_flag=True,
        help="Ignore a stray ')' after the expression.",
        callback=_override("lenient"),
        expose_value=False,
    )(fn)
    return fn
