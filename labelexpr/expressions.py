"""
Expression tree produced by the parser.

Example:
    from labelexpr import parse_text, Label

    expr = parse_text("tag:a && !(tag:b || tag:c)")

    # Or build the same tree directly
    expr = Label("tag:a") & ~(Label("tag:b") | Label("tag:c"))

    str(expr)  # '(tag:a && !(tag:b || tag:c))'

Evaluating a tree against a set of labels is left to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .tokens import Operator

# Names that would lex back as operators
_RESERVED_NAMES = frozenset(op.value for op in Operator if op.is_binary)


class Expression(ABC):
    """Base class for expression tree nodes."""

    @abstractmethod
    def to_string(self) -> str:
        """Render the expression as text that parses back to an equal tree."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation of the tree."""
        ...

    @abstractmethod
    def _iter_labels(self) -> Iterator[str]: ...

    def labels(self) -> list[str]:
        """Label names in left-to-right order, duplicates included."""
        return list(self._iter_labels())

    def __and__(self, other: Expression) -> Expression:
        """Combine two expressions with `&&`."""
        return Operation(self, Operator.AND, other)

    def __or__(self, other: Expression) -> Expression:
        """Combine two expressions with `||`."""
        return Operation(self, Operator.OR, other)

    def __invert__(self) -> Expression:
        """Negate the expression with `!`."""
        return Inverse(self)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Label(Expression):
    """Leaf referencing a label by name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Label name must be non-empty")
        if self.name in _RESERVED_NAMES:
            raise ValueError(f"{self.name!r} is an operator, not a label name")
        bad = next((ch for ch in self.name if ch in "()!" or ch.isspace()), None)
        if bad is not None:
            raise ValueError(f"Label name {self.name!r} contains {bad!r}")

    def to_string(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {"type": "label", "name": self.name}

    def _iter_labels(self) -> Iterator[str]:
        yield self.name


@dataclass(frozen=True)
class Inverse(Expression):
    """`!` negation of a single term."""

    operand: Expression

    def to_string(self) -> str:
        return f"!{self.operand.to_string()}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "not", "operand": self.operand.to_dict()}

    def _iter_labels(self) -> Iterator[str]:
        yield from self.operand._iter_labels()


@dataclass(frozen=True)
class Operation(Expression):
    """`&&` or `||` combination of two expressions."""

    left: Expression
    operator: Operator
    right: Expression

    def __post_init__(self) -> None:
        if not self.operator.is_binary:
            raise ValueError(f"{self.operator.name} is not a binary operator")

    def to_string(self) -> str:
        left_str = self.left.to_string()
        right_str = self.right.to_string()
        return f"({left_str} {self.operator.value} {right_str})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.operator.name.lower(),
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }

    def _iter_labels(self) -> Iterator[str]:
        yield from self.left._iter_labels()
        yield from self.right._iter_labels()
