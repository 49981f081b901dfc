"""
Tokenizer for label expressions.

`(`, `)` and `!` are self-delimiting; every other token boundary is
whitespace. Fragments that are not an operator or a grouping mark become
labels verbatim, so `tag:test` and `hello-world` are single labels.

This is stricter than padding `(` and `!` with a trailing space, padding
`)` with a leading space, and splitting on single spaces only. That scheme
keeps `a(b`, `)a` and `a<TAB>b` whole as the labels `a(`, `)a` and
`a<TAB>b`. Here they split into `a ( b`, `) a` and `a b`, so a label never
contains whitespace, `(`, `)` or `!`.

Any input tokenizes; whether the tokens form a valid expression is the
parser's concern.

Example:
    >>> tokenize("tag:a && !(b)")
    [Label('tag:a'), Operator(AND), Operator(NOT), OpenGroup, Label('b'), CloseGroup]
"""

from __future__ import annotations

from .tokens import Operator, Token

_SELF_DELIMITING = "()!"

_KEYWORDS = {
    "&&": Operator.AND,
    "||": Operator.OR,
}


class _Tokenizer:
    """Single pass scanner over an expression string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.text[self.pos].isspace():
            self.pos += 1

    def _read_fragment(self) -> str:
        """Read until whitespace or a self-delimiting character."""
        start = self.pos
        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch in _SELF_DELIMITING or ch.isspace():
                break
            self.pos += 1
        return self.text[start : self.pos]

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []

        while True:
            self._skip_whitespace()
            if self.pos >= self.length:
                break

            ch = self.text[self.pos]
            start_pos = self.pos

            if ch == "(":
                tokens.append(Token.open_group(start_pos))
                self.pos += 1
            elif ch == ")":
                tokens.append(Token.close_group(start_pos))
                self.pos += 1
            elif ch == "!":
                tokens.append(Token.operator(Operator.NOT, start_pos))
                self.pos += 1
            else:
                fragment = self._read_fragment()
                op = _KEYWORDS.get(fragment)
                if op is not None:
                    tokens.append(Token.operator(op, start_pos))
                else:
                    tokens.append(Token.label(fragment, start_pos))

        return tokens


def tokenize(text: str) -> list[Token]:
    """
    Split an expression string into tokens, in source order.

    Args:
        text: The expression to tokenize

    Returns:
        The tokens; empty for empty or whitespace-only input
    """
    return _Tokenizer(text).tokenize()
