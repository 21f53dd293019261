"""Tests for failure modes and invalid input handling."""

import pytest

from abacus_pkg.calculator import Calculator
from abacus_pkg.config import MAX_EXPRESSION_DEPTH, MAX_INPUT_LENGTH
from abacus_pkg.parser import parse_expression
from abacus_pkg.types import InvalidCharacterError, InvalidExpressionError


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        with pytest.raises(InvalidExpressionError):
            parse_expression("")

    def test_whitespace_only(self):
        with pytest.raises(InvalidExpressionError):
            parse_expression(" \t\n ")

    def test_too_long_input(self):
        long_input = "1+" * (MAX_INPUT_LENGTH // 2) + "1"
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_expression(long_input)
        assert exc_info.value.code == "TOO_LONG"

    def test_bad_character_reported_before_length(self):
        long_input = "1+" * MAX_INPUT_LENGTH + "a"
        with pytest.raises(InvalidCharacterError) as exc_info:
            parse_expression(long_input)
        assert exc_info.value.position == 2 * MAX_INPUT_LENGTH

    def test_whitespace_not_counted_toward_length(self):
        padded = " " * MAX_INPUT_LENGTH + "1 + 2" + " " * MAX_INPUT_LENGTH
        assert Calculator().calculate(padded) == 3

    def test_brackets_are_not_parentheses(self):
        with pytest.raises(InvalidCharacterError):
            parse_expression("[1 + 2]")

    def test_code_is_never_executed(self):
        for expr in ("__import__('os')", "exec('1')", "lambda: 1", "1 if 1 else 2"):
            with pytest.raises(InvalidCharacterError):
                parse_expression(expr)

    def test_unicode_digits_rejected(self):
        with pytest.raises(InvalidCharacterError):
            parse_expression("١ + 1")

    def test_too_deep_parentheses(self):
        deep_expr = "(" * (MAX_EXPRESSION_DEPTH + 1) + "1" + ")" * (MAX_EXPRESSION_DEPTH + 1)
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_expression(deep_expr)
        assert exc_info.value.code == "TOO_DEEP"

    def test_too_deep_unary(self):
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_expression("-" * (MAX_EXPRESSION_DEPTH + 1) + "1")
        assert exc_info.value.code == "TOO_DEEP"

    def test_depth_at_limit_is_allowed(self):
        expr = "(" * MAX_EXPRESSION_DEPTH + "1" + ")" * MAX_EXPRESSION_DEPTH
        assert Calculator().calculate(expr) == 1


class TestEvaluationFailures:
    """Test failures that only show up while evaluating."""

    def test_float_overflow(self):
        calc = Calculator()
        calc.add(5)
        huge = "9" * 400 + ".0"
        with pytest.raises(InvalidExpressionError) as exc_info:
            calc.calculate(huge)
        assert exc_info.value.code == "NON_FINITE"
        assert calc.get_result() == 5

    def test_infinite_intermediate_is_rejected(self):
        huge = "9" * 400 + ".0"
        with pytest.raises(InvalidExpressionError):
            Calculator().calculate(f"1/{huge}")

    def test_integer_to_float_overflow(self):
        big = "9" * 400
        with pytest.raises(InvalidExpressionError) as exc_info:
            Calculator().calculate(f"{big}/3")
        assert exc_info.value.code == "NON_FINITE"

    def test_big_integers_are_exact(self):
        big = "9" * 400
        assert Calculator().calculate(f"{big}+1") == 10**400

    def test_exact_mode_has_no_overflow(self):
        big = "9" * 400
        calc = Calculator(arithmetic="exact")
        assert calc.calculate(f"{big}.0/{big}") == 1
