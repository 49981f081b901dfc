"""
Boolean label expressions.

Turns strings such as `tag:a && (tag:b || !tag:c)` into an expression tree.

Example:
    from labelexpr import parse_text

    expr = parse_text("tag:a && (tag:b || !tag:c)")
    expr.labels()  # ['tag:a', 'tag:b', 'tag:c']
"""

from __future__ import annotations

from .exceptions import (
    ExpressionError,
    InvalidBinaryOperatorError,
    NestingTooDeepError,
    UnexpectedTokenError,
    UnterminatedGroupError,
)
from .expressions import Expression, Inverse, Label, Operation
from .lexer import tokenize
from .options import ParserOptions
from .parser import Parser, TokenCursor, parse, parse_text
from .tokens import Operator, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "Expression",
    "ExpressionError",
    "InvalidBinaryOperatorError",
    "Inverse",
    "Label",
    "NestingTooDeepError",
    "Operation",
    "Operator",
    "Parser",
    "ParserOptions",
    "Token",
    "TokenCursor",
    "TokenType",
    "UnexpectedTokenError",
    "UnterminatedGroupError",
    "__version__",
    "parse",
    "parse_text",
    "tokenize",
]
