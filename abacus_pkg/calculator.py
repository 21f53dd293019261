"""Accumulator calculator.

A ``Calculator`` owns a single numeric register, ``result``, which starts at
0 and is updated in place by each operation. Every operation either
completes and writes a finite value or raises and leaves ``result`` as it
was.
"""

from __future__ import annotations

import math
from typing import Any

from . import config as _config
from .evaluator import ensure_finite, evaluate_tree, get_arithmetic, is_number
from .logging_config import get_logger
from .parser import format_number, parse_expression
from .types import CalculatorError, DivisionByZeroError, InvalidExpressionError

logger = get_logger("calculator")


class Calculator:
    """Four-function calculator with an expression evaluator.

    Args:
        arithmetic: "float" (default from ABACUS_ARITHMETIC) or "exact"

    Example:
        >>> calc = Calculator()
        >>> calc.add(10)
        >>> calc.divide(5)
        >>> calc.get_result()
        2.0
        >>> calc.calculate("(2 + 3) * 4")
        20
    """

    def __init__(self, arithmetic: str | None = None):
        self.arithmetic = get_arithmetic(arithmetic or _config.ARITHMETIC)
        self.result: Any = self.arithmetic.zero()

    def __repr__(self) -> str:
        return f"Calculator(arithmetic={self.arithmetic.name!r}, result={self.result!r})"

    def _operand(self, number: Any) -> Any:
        if not is_number(number):
            raise TypeError(
                f"Operand must be a real number, not {type(number).__name__}"
            )
        if isinstance(number, float) and not math.isfinite(number):
            raise InvalidExpressionError("Operand is not a finite number", "NON_FINITE")
        return self.arithmetic.coerce(number)

    def _apply(self, operation: Any, operand: Any) -> None:
        try:
            value = operation(self.result, operand)
        except OverflowError as e:
            raise InvalidExpressionError(
                "Numeric overflow in accumulator", "NON_FINITE"
            ) from e
        self.result = ensure_finite(value, self.arithmetic)

    def add(self, number: Any) -> None:
        self._apply(self.arithmetic.add, self._operand(number))

    def subtract(self, number: Any) -> None:
        self._apply(self.arithmetic.subtract, self._operand(number))

    def multiply(self, number: Any) -> None:
        self._apply(self.arithmetic.multiply, self._operand(number))

    def divide(self, number: Any) -> None:
        """Divide the accumulator by ``number``.

        Raises:
            DivisionByZeroError: If ``number`` is zero; ``result`` is unchanged
        """
        operand = self._operand(number)
        if operand == 0:
            raise DivisionByZeroError()
        self._apply(self.arithmetic.divide, operand)

    def clear(self) -> None:
        self.result = self.arithmetic.zero()

    def get_result(self) -> Any:
        return self.result

    def calculate(self, expression: str) -> Any:
        """Evaluate an arithmetic expression and store the value in ``result``.

        The expression may contain integers, decimals, ``+ - * /``,
        parentheses and whitespace. Operator precedence and left
        associativity follow ordinary arithmetic.

        Args:
            expression: Expression string, e.g. ``"2 + 3 * 4"``

        Returns:
            The computed value (also available through ``get_result``)

        Raises:
            InvalidCharacterError: If a character outside the arithmetic alphabet appears
            DivisionByZeroError: On a literal ``/0`` or a divisor that evaluates to 0
            InvalidExpressionError: On any other parse or evaluation failure
        """
        try:
            tree = parse_expression(expression)
            value = evaluate_tree(tree, self.arithmetic)
        except CalculatorError as e:
            logger.warning("Rejected expression %.80r: %s [%s]", expression, e, e.code)
            raise
        self.result = value
        logger.debug("calculate(%r) -> %s", expression, format_number(value))
        return value
