from __future__ import annotations

import click
import rich_click

from labelexpr.exceptions import ExpressionError
from labelexpr.parser import parse_text

from ..context import CLIContext
from ..errors import CLIError
from ..options import output_options, parser_options
from ..runner import CommandOutput, run_command
from ._expression_input import read_expression


@click.command(name="parse", cls=rich_click.RichCommand)
@click.argument("expression")
@output_options
@parser_options
@click.pass_obj
def parse_cmd(ctx: CLIContext, expression: str) -> None:
    """Parse EXPRESSION and print its tree ('-' reads stdin).

    Example: labelexpr parse 'tag:a && (tag:b || !tag:c)'
    """

    def fn(ctx: CLIContext, _warnings: list[str]) -> CommandOutput:
        source = read_expression(expression)
        options = ctx.parser_options()
        try:
            expr = parse_text(source, options=options)
        except ExpressionError as exc:
            raise CLIError.from_expression_error(exc, source) from exc
        data = {
            "text": expr.to_string(),
            "labels": expr.labels(),
            "expression": expr.to_dict(),
        }
        return CommandOutput(data=data)

    run_command(ctx, command="parse", fn=fn)
