"""
Recursive descent parser for label expressions.

Grammar:
    expression := single (operator expression)?
    single     := label | '!' single | '(' expression ')'
    operator   := '&&' | '||'

The binary rule recurses on its right-hand side, so chains are
right-associative and `&&` and `||` share one precedence level:
`a && b || c` parses as `a && (b || c)`. `!` binds to the single term that
follows it: `!a && b` parses as `(!a) && b`.

Example:
    >>> parse_text("!a && b") == Operation(Inverse(Label("a")), Operator.AND, Label("b"))
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import (
    InvalidBinaryOperatorError,
    NestingTooDeepError,
    UnexpectedTokenError,
    UnterminatedGroupError,
)
from .expressions import Expression, Inverse, Label, Operation
from .lexer import tokenize
from .options import ParserOptions
from .tokens import Operator, Token, TokenType

logger = logging.getLogger(__name__)


def _token_pos(token: Token) -> int | None:
    return token.pos if token.pos >= 0 else None


class TokenCursor:
    """Lookahead-1 cursor over an immutable token sequence.

    The cursor only moves forward.
    """

    def __init__(self, tokens: Iterable[Token], *, end_pos: int | None = None):
        self.tokens = tuple(tokens)
        self.pos = 0
        if end_pos is None and self.tokens:
            last = self.tokens[-1]
            if last.pos >= 0:
                end_pos = last.pos + len(last.text)
        self.end_pos = end_pos

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.tokens)

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self.exhausted:
            return None
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return the next token."""
        token = self.tokens[self.pos]
        self.pos += 1
        return token


class Parser:
    """Parses one expression from a token sequence.

    A parser is single-use: it owns its cursor and depth counter, so
    concurrent parses need separate instances.
    """

    def __init__(
        self,
        tokens: Iterable[Token] | TokenCursor,
        *,
        options: ParserOptions | None = None,
    ):
        self.cursor = tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)
        self.options = options or ParserOptions()
        self._depth = 0

    def _enter(self, token: Token | None) -> None:
        self._depth += 1
        if self._depth > self.options.max_depth:
            pos = _token_pos(token) if token is not None else self.cursor.end_pos
            raise NestingTooDeepError(
                f"Expression nests deeper than {self.options.max_depth} levels",
                pos=pos,
                token=token,
            )

    def _leave(self) -> None:
        self._depth -= 1

    def parse(self) -> Expression:
        """Parse the whole token sequence into one expression."""
        if self.cursor.exhausted:
            raise UnexpectedTokenError("Empty expression", pos=self.cursor.end_pos)

        try:
            expr = self.parse_expression()
        except RecursionError as exc:
            # max_depth set above what the interpreter stack can hold
            token = self.cursor.peek()
            pos = _token_pos(token) if token is not None else self.cursor.end_pos
            raise NestingTooDeepError(
                "Expression nests deeper than the interpreter recursion limit allows",
                pos=pos,
                token=token,
            ) from exc

        leftover = self.cursor.peek()
        if leftover is not None:
            # parse_expression only stops early on ')'
            if self.options.strict:
                raise UnexpectedTokenError(
                    "Unmatched ')'", pos=_token_pos(leftover), token=leftover
                )
            logger.debug(f"Ignoring {self.cursor.remaining} trailing token(s)")

        return expr

    def parse_expression(self) -> Expression:
        """Parse a single term, optionally followed by an operator and another expression."""
        self._enter(self.cursor.peek())
        try:
            first = self.parse_single()

            token = self.cursor.peek()
            if token is None or token.type == TokenType.CLOSE_GROUP:
                return first

            if token.is_operator(Operator.NOT):
                raise InvalidBinaryOperatorError(
                    "'!' cannot join two terms; expected '&&' or '||'",
                    pos=_token_pos(token),
                    token=token,
                )
            if not token.is_operator(Operator.AND, Operator.OR):
                raise InvalidBinaryOperatorError(
                    f"Expected '&&' or '||' before '{token.text}'",
                    pos=_token_pos(token),
                    token=token,
                )
            self.cursor.advance()
            assert isinstance(token.value, Operator)

            right = self.parse_expression()
            return Operation(first, token.value, right)
        finally:
            self._leave()

    def parse_single(self) -> Expression:
        """Parse one term: a label, a negated term or a parenthesized expression."""
        token = self.cursor.peek()

        if token is None:
            raise UnexpectedTokenError(
                "Unexpected end of expression; expected a label, '!' or '('",
                pos=self.cursor.end_pos,
            )

        if token.type == TokenType.LABEL:
            self.cursor.advance()
            assert isinstance(token.value, str)
            return Label(token.value)

        if token.is_operator(Operator.NOT):
            self.cursor.advance()
            self._enter(token)
            try:
                operand = self.parse_single()
            finally:
                self._leave()
            return Inverse(operand)

        if token.type == TokenType.OPEN_GROUP:
            self.cursor.advance()
            expr = self.parse_expression()
            closing = self.cursor.peek()
            if closing is None or closing.type != TokenType.CLOSE_GROUP:
                raise UnterminatedGroupError(
                    "Unbalanced parentheses: '(' is never closed",
                    pos=_token_pos(token),
                    token=token,
                )
            self.cursor.advance()
            return expr

        if token.type == TokenType.CLOSE_GROUP:
            raise UnexpectedTokenError(
                "Unexpected ')'; expected a label, '!' or '('",
                pos=_token_pos(token),
                token=token,
            )

        raise UnexpectedTokenError(
            f"Missing operand before operator '{token.text}'",
            pos=_token_pos(token),
            token=token,
        )


def parse(tokens: Iterable[Token], *, options: ParserOptions | None = None) -> Expression:
    """
    Parse a token sequence into an expression tree.

    Args:
        tokens: Tokens as produced by `tokenize`
        options: Depth limit and trailing-token policy

    Returns:
        The root of the expression tree

    Raises:
        ExpressionError: If the tokens do not form a valid expression
    """
    return Parser(tokens, options=options).parse()


def parse_text(text: str, *, options: ParserOptions | None = None) -> Expression:
    """
    Tokenize and parse an expression string.

    Examples:
        >>> parse_text("tag:a && !tag:b").labels()
        ['tag:a', 'tag:b']

        >>> str(parse_text("a && b || c"))
        '(a && (b || c))'
    """
    tokens = tokenize(text)
    logger.debug(f"Tokenized {len(text)} chars into {len(tokens)} tokens")
    expr = Parser(TokenCursor(tokens, end_pos=len(text)), options=options).parse()
    logger.debug(f"Parsed expression: {expr}")
    return expr
