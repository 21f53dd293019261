"""Expression tree evaluation over pluggable arithmetic backends.

Two backends are provided:
- ``float``: Python ``int``/``float`` semantics with true division
- ``exact``: SymPy ``Rational`` arithmetic, so ``1/3*3`` is exactly 1

The evaluator only ever applies the four arithmetic operations and
negation to numbers; it never executes the input as code.
"""

from __future__ import annotations

import math
import numbers
from typing import Any

import sympy as sp

from .logging_config import get_logger
from .parser import BinaryOp, Node, Number, UnaryOp, format_number
from .types import DivisionByZeroError, InvalidExpressionError

logger = get_logger("evaluator")


class FloatArithmetic:
    """Native Python numbers: integer literals stay ``int``, ``/`` yields ``float``."""

    name = "float"

    def zero(self) -> Any:
        return 0

    def number(self, text: str) -> Any:
        return float(text) if "." in text else int(text)

    def coerce(self, value: Any) -> Any:
        if isinstance(value, sp.Basic):
            return int(value) if value.is_Integer else float(value)
        return value

    def add(self, a: Any, b: Any) -> Any:
        return a + b

    def subtract(self, a: Any, b: Any) -> Any:
        return a - b

    def multiply(self, a: Any, b: Any) -> Any:
        return a * b

    def divide(self, a: Any, b: Any) -> Any:
        return a / b

    def negate(self, a: Any) -> Any:
        return -a

    def is_finite(self, value: Any) -> bool:
        return not isinstance(value, float) or math.isfinite(value)


class ExactArithmetic(FloatArithmetic):
    """Exact rational arithmetic backed by SymPy."""

    name = "exact"

    def zero(self) -> Any:
        return sp.Integer(0)

    def number(self, text: str) -> Any:
        if text.startswith("."):
            text = "0" + text
        if text.endswith("."):
            text = text + "0"
        return sp.Rational(text)

    def coerce(self, value: Any) -> Any:
        if isinstance(value, sp.Rational):
            return value
        if isinstance(value, float):
            # Use the shortest repr so 0.1 becomes 1/10, not its binary expansion
            return sp.Rational(repr(value))
        return sp.Rational(value)

    def is_finite(self, value: Any) -> bool:
        return bool(value.is_finite)


_BACKENDS = {
    FloatArithmetic.name: FloatArithmetic(),
    ExactArithmetic.name: ExactArithmetic(),
}


def get_arithmetic(name: str) -> FloatArithmetic:
    """Return the arithmetic backend registered under ``name``.

    Raises:
        ValueError: If no backend has that name
    """
    try:
        return _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown arithmetic mode {name!r} (choose from {', '.join(_BACKENDS)})"
        ) from None


def is_number(value: Any) -> bool:
    """True for real numbers, excluding ``bool``."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def ensure_finite(value: Any, arithmetic: FloatArithmetic) -> Any:
    """Return ``value`` unchanged, or raise if it is infinite or NaN."""
    if not arithmetic.is_finite(value):
        raise InvalidExpressionError("Result is not a finite number", "NON_FINITE")
    return value


def _combine(node: Node, values: list, arithmetic: FloatArithmetic) -> Any:
    if isinstance(node, UnaryOp):
        operand = values.pop()
        return operand if node.op == "+" else arithmetic.negate(operand)
    right = values.pop()
    left = values.pop()
    if node.op == "+":
        return arithmetic.add(left, right)
    if node.op == "-":
        return arithmetic.subtract(left, right)
    if node.op == "*":
        return arithmetic.multiply(left, right)
    if right == 0:
        raise DivisionByZeroError()
    return arithmetic.divide(left, right)


def _evaluate(root: Node, arithmetic: FloatArithmetic) -> Any:
    # Post-order walk with an explicit stack; left-leaning chains such as
    # 1+1+...+1 are as deep as they are long.
    values: list = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, Number):
            value = arithmetic.number(node.text)
        elif expanded:
            value = _combine(node, values, arithmetic)
        elif isinstance(node, UnaryOp):
            stack.append((node, True))
            stack.append((node.operand, False))
            continue
        elif isinstance(node, BinaryOp):
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
            continue
        else:
            raise InvalidExpressionError(
                f"Unsupported node {type(node).__name__}", "SYNTAX_ERROR"
            )
        # Every intermediate value must be finite, not just the final one
        values.append(ensure_finite(value, arithmetic))
    return values.pop()


def evaluate_tree(node: Node, arithmetic: FloatArithmetic) -> Any:
    """Evaluate an expression tree.

    Raises:
        DivisionByZeroError: If a divisor evaluates to zero
        InvalidExpressionError: If a value overflows, is not finite, or a
            literal cannot be converted
    """
    try:
        value = _evaluate(node, arithmetic)
    except OverflowError as e:
        raise InvalidExpressionError(
            "Numeric overflow during evaluation", "NON_FINITE"
        ) from e
    except ValueError as e:
        # int() refuses literals beyond sys.get_int_max_str_digits()
        raise InvalidExpressionError(f"Invalid number: {e}", "SYNTAX_ERROR") from e
    logger.debug(
        "Evaluated tree with %s arithmetic: %s", arithmetic.name, format_number(value)
    )
    return value
