"""Abacus package: accumulator calculator with a safe arithmetic expression evaluator."""

from .api import evaluate, validate_expression
from .calculator import Calculator
from .types import (
    CalculatorError,
    DivisionByZeroError,
    EvalResult,
    InvalidCharacterError,
    InvalidExpressionError,
)

__all__ = [
    "config",
    "parser",
    "evaluator",
    "calculator",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "Calculator",
    "CalculatorError",
    "DivisionByZeroError",
    "EvalResult",
    "InvalidCharacterError",
    "InvalidExpressionError",
    "evaluate",
    "validate_expression",
]
