"""
Token definitions shared by the lexer and the parser.

A token is one of:
- an operator (`&&`, `||` or `!`)
- a grouping mark (`(` or `)`)
- a label, an opaque run of non-whitespace characters
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Operator(Enum):
    """Boolean operators. The value is the operator's source text."""

    AND = "&&"
    OR = "||"
    NOT = "!"

    @property
    def is_binary(self) -> bool:
        return self is not Operator.NOT


class TokenType(Enum):
    """Token kinds produced by the lexer."""

    OPERATOR = auto()  # &&, ||, !
    OPEN_GROUP = auto()  # (
    CLOSE_GROUP = auto()  # )
    LABEL = auto()  # anything else


@dataclass(frozen=True)
class Token:
    """A token from an expression string.

    `pos` is the offset in the source string, used for error messages.
    It is excluded from comparisons so hand-built tokens equal lexed ones.
    """

    type: TokenType
    value: Operator | str | None = None
    pos: int = field(default=-1, compare=False)

    @classmethod
    def label(cls, text: str, pos: int = -1) -> Token:
        if not text:
            raise ValueError("Label text must be non-empty")
        return cls(TokenType.LABEL, text, pos)

    @classmethod
    def operator(cls, op: Operator, pos: int = -1) -> Token:
        return cls(TokenType.OPERATOR, op, pos)

    @classmethod
    def open_group(cls, pos: int = -1) -> Token:
        return cls(TokenType.OPEN_GROUP, None, pos)

    @classmethod
    def close_group(cls, pos: int = -1) -> Token:
        return cls(TokenType.CLOSE_GROUP, None, pos)

    @property
    def text(self) -> str:
        """Source text of the token."""
        if self.type == TokenType.OPEN_GROUP:
            return "("
        if self.type == TokenType.CLOSE_GROUP:
            return ")"
        if isinstance(self.value, Operator):
            return self.value.value
        return str(self.value)

    def is_operator(self, *ops: Operator) -> bool:
        """True if this is an operator token, optionally one of `ops`."""
        if self.type != TokenType.OPERATOR:
            return False
        return not ops or self.value in ops

    def __repr__(self) -> str:
        if self.type == TokenType.LABEL:
            return f"Label({self.value!r})"
        if self.type == TokenType.OPERATOR:
            assert isinstance(self.value, Operator)
            return f"Operator({self.value.name})"
        if self.type == TokenType.OPEN_GROUP:
            return "OpenGroup"
        return "CloseGroup"
