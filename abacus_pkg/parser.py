"""Input parsing and preprocessing module.

This module handles:
- Input sanitization (whitespace removal) and validation
- Detection of literal division by zero before parsing
- Tokenizing the sanitized string
- Recursive-descent parsing into an immutable expression tree
- Result formatting and balancing checks for parentheses

Grammar (standard precedence, left associative)::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | '(' expr ')'
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

import sympy as sp

from . import config as _config
from .config import (
    CACHE_SIZE_PARSE,
    INVALID_CHAR_REGEX,
    LITERAL_ZERO_DIVISION_REGEX,
    MAX_EXPRESSION_DEPTH,
    MAX_INPUT_LENGTH,
    NUMBER_REGEX,
    WHITESPACE_REGEX,
)
from .types import DivisionByZeroError, InvalidCharacterError, InvalidExpressionError

OPERATORS = frozenset("+-*/")


@dataclass(frozen=True)
class Token:
    """A lexical token; ``position`` indexes the sanitized string."""

    kind: str  # "NUMBER", "OP", "LPAREN", "RPAREN", "END"
    text: str
    position: int


@dataclass(frozen=True)
class Number:
    text: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


Node = Union[Number, UnaryOp, BinaryOp]


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value for display.

    Integers and exact rationals are printed in full; floats use the given
    number of significant digits. Integers too long for ``str`` fall back to
    scientific notation with the same number of significant digits.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = _config.OUTPUT_PRECISION
    if isinstance(val, bool):
        return str(val)
    if not isinstance(val, float):
        # int and SymPy Integer/Rational print exactly, e.g. "1/3"
        try:
            return str(val)
        except ValueError:
            # More digits than sys.get_int_max_str_digits() allows
            return str(sp.sympify(val).evalf(int(precision)))
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(val)
    except (ValueError, TypeError, OverflowError):
        return str(val)


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(input_str):
        if char == "(":
            stack.append(i)
        elif char == ")":
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]  # Position of first unmatched
    return True, None


def sanitize(expression: str) -> str:
    """Strip whitespace and validate an expression string.

    The alphabet is checked first, on the raw input, so a bad character is
    reported even in an over-long string. Length is measured after
    whitespace is removed.

    Args:
        expression: Raw expression from the caller

    Returns:
        The expression with all whitespace removed

    Raises:
        InvalidExpressionError: If input is not a string, empty, or too long
        InvalidCharacterError: If a character outside ``0-9 + - * / ( ) .`` appears
        DivisionByZeroError: If a literal ``/0`` appears
    """
    if not isinstance(expression, str):
        raise InvalidExpressionError(
            f"Expression must be a string, not {type(expression).__name__}",
            "SYNTAX_ERROR",
        )
    match = INVALID_CHAR_REGEX.search(expression)
    if match:
        raise InvalidCharacterError(match.group(), match.start())

    sanitized = WHITESPACE_REGEX.sub("", expression)
    if not sanitized:
        raise InvalidExpressionError("Empty expression", "EMPTY_EXPRESSION")
    if len(sanitized) > MAX_INPUT_LENGTH:
        raise InvalidExpressionError(
            f"Input too long (max {MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    if LITERAL_ZERO_DIVISION_REGEX.search(sanitized):
        raise DivisionByZeroError()

    return sanitized


def tokenize(sanitized: str) -> list[Token]:
    """Split a sanitized expression into tokens, ending with an END token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(sanitized):
        char = sanitized[pos]
        if char in OPERATORS:
            tokens.append(Token("OP", char, pos))
            pos += 1
        elif char == "(":
            tokens.append(Token("LPAREN", char, pos))
            pos += 1
        elif char == ")":
            tokens.append(Token("RPAREN", char, pos))
            pos += 1
        else:
            match = NUMBER_REGEX.match(sanitized, pos)
            if match is None:
                # A lone '.' is the only way to get here after sanitizing
                raise InvalidExpressionError(
                    f"Malformed number at position {pos}", "SYNTAX_ERROR"
                )
            tokens.append(Token("NUMBER", match.group(), pos))
            pos = match.end()
    tokens.append(Token("END", "", len(sanitized)))
    return tokens


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise InvalidExpressionError(
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)",
                "TOO_DEEP",
            )

    def _unexpected(self) -> InvalidExpressionError:
        token = self.current
        if token.kind == "END":
            return InvalidExpressionError(
                "Unexpected end of expression", "SYNTAX_ERROR"
            )
        return InvalidExpressionError(
            f"Unexpected {token.text!r} at position {token.position}", "SYNTAX_ERROR"
        )

    def parse(self) -> Node:
        node = self._expr()
        if self.current.kind != "END":
            raise self._unexpected()
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self.current.kind == "OP" and self.current.text in "+-":
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self.current.kind == "OP" and self.current.text in "*/":
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self.current.kind == "OP" and self.current.text in "+-":
            op = self._advance().text
            self._enter()
            operand = self._unary()
            self.depth -= 1
            return UnaryOp(op, operand)
        return self._primary()

    def _primary(self) -> Node:
        token = self.current
        if token.kind == "NUMBER":
            self._advance()
            return Number(token.text)
        if token.kind == "LPAREN":
            self._advance()
            self._enter()
            node = self._expr()
            self.depth -= 1
            if self.current.kind != "RPAREN":
                raise self._unexpected()
            self._advance()
            return node
        raise self._unexpected()


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_sanitized(sanitized: str) -> Node:
    """Parse an already sanitized expression string into an expression tree.

    Raises:
        InvalidExpressionError: On unbalanced parentheses or malformed syntax
    """
    balanced, position = is_balanced(sanitized)
    if not balanced:
        raise InvalidExpressionError(
            f"Unbalanced parentheses at position {position}", "UNBALANCED"
        )
    try:
        return _Parser(tokenize(sanitized)).parse()
    except RecursionError as e:
        raise InvalidExpressionError(
            "Expression too deeply nested", "TOO_DEEP"
        ) from e


def parse_expression(expression: str) -> Node:
    """Sanitize, validate and parse a raw expression string."""
    return parse_sanitized(sanitize(expression))
