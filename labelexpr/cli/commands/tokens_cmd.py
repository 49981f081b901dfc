from __future__ import annotations

from typing import Any

import click
import rich_click

from labelexpr.lexer import tokenize
from labelexpr.tokens import Operator, Token

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command
from ._expression_input import read_expression


def _token_row(token: Token) -> dict[str, Any]:
    kind = token.value.name if isinstance(token.value, Operator) else token.type.name
    return {"pos": token.pos, "type": kind.lower(), "text": token.text}


@click.command(name="tokens", cls=rich_click.RichCommand)
@click.argument("expression")
@output_options
@click.pass_obj
def tokens_cmd(ctx: CLIContext, expression: str) -> None:
    """Print the tokens of EXPRESSION ('-' reads stdin)."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        source = read_expression(expression)
        return CommandOutput(data=[_token_row(token) for token in tokenize(source)])

    run_command(ctx, command="tokens", fn=fn)
