"""Public API for Abacus - returns structured objects without side effects."""

from __future__ import annotations

from .calculator import Calculator
from .logging_config import get_logger
from .parser import format_number, parse_expression
from .types import CalculatorError, EvalResult

logger = get_logger("api")


def evaluate(
    expression: str, arithmetic: str | None = None, precision: int | None = None
) -> EvalResult:
    """Evaluate an arithmetic expression on a fresh calculator.

    Args:
        expression: Expression string (e.g., "2 + 3 * 4")
        arithmetic: "float" or "exact" (default from config)
        precision: Significant digits used to format float results

    Returns:
        EvalResult with the formatted result, or the error and its code

    Example:
        >>> from abacus_pkg.api import evaluate
        >>> evaluate("(2 + 3) * 4").result
        '20'
        >>> evaluate("10 / 0").error_code
        'DIVISION_BY_ZERO'
        >>> evaluate("1/3*3", arithmetic="exact").result
        '1'
    """
    calc = Calculator(arithmetic)
    try:
        value = calc.calculate(expression)
        result = format_number(value, precision)
    except CalculatorError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    except Exception as e:
        logger.error("Unexpected evaluation error for %r: %s", expression, e, exc_info=True)
        return EvalResult(
            ok=False, error="Unexpected evaluation error", error_code="UNKNOWN_ERROR"
        )
    return EvalResult(ok=True, result=result, value=value)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Only the checks that happen before evaluation run here, so a divisor
    that evaluates to zero, such as ``10/(5-5)``, is still reported valid.

    Args:
        expression: Expression string to validate

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from abacus_pkg.api import validate_expression
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("2 + a")
        (False, "Invalid character 'a' at position 4")
    """
    try:
        parse_expression(expression)
        return True, None
    except CalculatorError as e:
        return False, str(e)
