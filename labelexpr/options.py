"""
Parser options.

Options are validated once, up front, so the parser itself never has to
check them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_DEPTH = 200


class ParserOptions(BaseModel):
    """Behavioral controls applied to a single parse.

    Attributes:
        max_depth: Maximum combined depth of groups, `!` chains and operator
            chains. Parsing deeper input raises `NestingTooDeepError`.
        strict: Reject a stray `)` left over after the top-level expression.
            With `strict=False` it is silently ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=1)
    strict: bool = True
