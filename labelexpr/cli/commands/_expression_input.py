from __future__ import annotations

import click

from ..errors import CLIError


def read_expression(expression: str) -> str:
    """Return the expression argument, reading stdin when it is '-'."""
    if expression != "-":
        return expression
    text = click.get_text_stream("stdin").read().strip()
    if not text:
        raise CLIError("Empty expression provided via stdin.", exit_code=2, error_type="usage_error")
    return text
