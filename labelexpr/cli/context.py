from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import ValidationError

from labelexpr.exceptions import ExpressionError
from labelexpr.options import ParserOptions

from .errors import CLIError
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int
    max_depth: int | None
    lenient: bool

    def parser_options(self) -> ParserOptions:
        settings: dict[str, Any] = {"strict": not self.lenient}
        if self.max_depth is not None:
            settings["max_depth"] = self.max_depth
        try:
            return ParserOptions(**settings)
        except ValidationError as e:
            errors = e.errors()
            messages = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in errors
            ]
            raise CLIError(
                "Invalid parser options: " + "; ".join(messages),
                exit_code=2,
                error_type="usage_error",
            ) from None


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    if isinstance(exc, ExpressionError):
        return 2
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    if isinstance(exc, ExpressionError):
        return ErrorInfo(
            type="parse_error",
            message=exc.message,
            details={"position": exc.pos, "errorClass": exc.__class__.__name__},
        )
    return ErrorInfo(type="internal_error", message=str(exc) or exc.__class__.__name__)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=CommandMeta(duration_ms=duration_ms),
        error=error,
    )
