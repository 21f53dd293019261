"""Type definitions: the evaluation result dataclass and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating an arithmetic expression."""

    ok: bool
    result: str | None = None
    value: Any = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, result={self.result!r})"


class CalculatorError(Exception):
    """Base class for every failure raised by the calculator."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidCharacterError(CalculatorError):
    """Raised when an expression contains a character outside the arithmetic alphabet."""

    default_code = "INVALID_CHARACTER"

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid character {character!r} at position {position}"
        )


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Raised on division by zero, either as an operand or inside an expression."""

    default_code = "DIVISION_BY_ZERO"

    def __init__(self, message: str = "Cannot divide by zero", code: str | None = None):
        super().__init__(message, code)


class InvalidExpressionError(CalculatorError):
    """Raised for any other parse or evaluation failure.

    ``code`` narrows down the cause: EMPTY_EXPRESSION, TOO_LONG, TOO_DEEP,
    UNBALANCED, SYNTAX_ERROR or NON_FINITE.
    """

    default_code = "INVALID_EXPRESSION"
