"""Performance tests and benchmarks for Abacus.

These tests are marked as 'slow' and can be skipped with: pytest -m "not slow"
"""

import time

import pytest

from abacus_pkg.calculator import Calculator
from abacus_pkg.config import MAX_INPUT_LENGTH
from abacus_pkg.parser import parse_sanitized, sanitize


@pytest.mark.slow
class TestParsingPerformance:
    """Test parsing performance."""

    def test_simple_expression_parsing_time(self):
        """Benchmark simple expression parsing."""
        start = time.time()
        for i in range(1000):
            # Distinct strings so the parse cache does not short-circuit
            _ = parse_sanitized(sanitize(f"{i} * 2 + (3 - {i}) / 4"))  # noqa: F841
        elapsed = time.time() - start
        assert elapsed < 2.0, f"Parsing too slow: {elapsed}s"

    def test_longest_accepted_input(self):
        """An expression at the input length limit still evaluates quickly."""
        expr = "1+" * ((MAX_INPUT_LENGTH - 1) // 2) + "1"
        start = time.time()
        value = Calculator().calculate(expr)
        elapsed = time.time() - start
        assert value == (MAX_INPUT_LENGTH - 1) // 2 + 1
        assert elapsed < 2.0, f"Long expression too slow: {elapsed}s"


@pytest.mark.slow
class TestEvaluationPerformance:
    """Test evaluation performance."""

    def test_repeated_calculate_time(self):
        calc = Calculator()
        start = time.time()
        for _ in range(5000):
            calc.calculate("(2 + 3) * 4 - 10 / 5")
        elapsed = time.time() - start
        assert calc.get_result() == 18
        assert elapsed < 2.0, f"Evaluation too slow: {elapsed}s"

    def test_exact_mode_time(self):
        calc = Calculator(arithmetic="exact")
        start = time.time()
        for i in range(200):
            calc.calculate(f"{i}/7 + 1/3 * (2 - {i})")
        elapsed = time.time() - start
        assert elapsed < 5.0, f"Exact evaluation too slow: {elapsed}s"
