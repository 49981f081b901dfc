"""
Errors raised while parsing label expressions.

All parse errors derive from `ExpressionError`, itself a `ValueError`, so
callers that only care whether an input is valid can catch either.
The lexer never raises; every failure comes from the parser.
"""

from __future__ import annotations

from .tokens import Token


class ExpressionError(ValueError):
    """Base class for invalid expressions."""

    def __init__(
        self,
        message: str,
        *,
        pos: int | None = None,
        token: Token | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.token = token

    def __str__(self) -> str:
        if self.pos is None:
            return self.message
        return f"{self.message} at position {self.pos}"


class UnexpectedTokenError(ExpressionError):
    """A term was required but the input ended or held `)` or a binary operator."""


class UnterminatedGroupError(ExpressionError):
    """An opening `(` has no matching `)`."""


class InvalidBinaryOperatorError(ExpressionError):
    """Something other than `&&` or `||` appeared between two terms."""


class NestingTooDeepError(ExpressionError):
    """The expression nests deeper than the configured limit."""
