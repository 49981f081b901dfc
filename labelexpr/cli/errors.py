from __future__ import annotations

from typing import Any

from labelexpr.exceptions import (
    ExpressionError,
    InvalidBinaryOperatorError,
    NestingTooDeepError,
    UnterminatedGroupError,
)

_PARSE_HINTS: dict[type[ExpressionError], str] = {
    InvalidBinaryOperatorError: (
        "Join terms with '&&' or '||', separated from labels by spaces: a && b"
    ),
    UnterminatedGroupError: "Close every '(' with a matching ')'",
    NestingTooDeepError: "Raise the limit with --max-depth or LABELEXPR_MAX_DEPTH",
}


class CLIError(Exception):
    """Failure reported to the user through the result envelope."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        error_type: str = "error",
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.error_type = error_type
        self.hint = hint
        self.details = details

    @classmethod
    def from_expression_error(cls, exc: ExpressionError, source: str) -> CLIError:
        """Wrap a lexer/parser failure on `source` as a `parse_error` (exit 2)."""
        details: dict[str, Any] = {
            "input": source,
            "position": exc.pos,
            "errorClass": type(exc).__name__,
        }
        if exc.token is not None:
            details["token"] = exc.token.text
        return cls(
            exc.message,
            exit_code=2,
            error_type="parse_error",
            hint=_PARSE_HINTS.get(type(exc)),
            details=details,
        )

    def __str__(self) -> str:  # pragma: no cover
        return self.message
