"""Fuzzing tests: random expressions checked against SymPy as a reference evaluator."""

import random
import string
import unittest

import sympy as sp
from sympy.parsing.sympy_parser import parse_expr

from abacus_pkg.calculator import Calculator
from abacus_pkg.types import CalculatorError


def _random_operand(rng, depth, division):
    roll = rng.random()
    if depth < 3 and roll < 0.3:
        return f"({_random_expression(rng, depth + 1, division)})"
    if roll < 0.45:
        return f"-{rng.randint(1, 99)}"
    return str(rng.randint(0, 99))


def _random_expression(rng, depth=0, division=True):
    """Build a random expression whose divisors are always non-zero literals."""
    parts = [_random_operand(rng, depth, division)]
    for _ in range(rng.randint(0, 4)):
        op = rng.choice("+-*/" if division else "+-*")
        if op == "/":
            parts.append(f"/ {rng.randint(1, 9)}")
        else:
            parts.append(f"{op} {_random_operand(rng, depth, division)}")
    return " ".join(parts)


class TestReferenceAgreement(unittest.TestCase):
    """calculate() must agree with an independent evaluator."""

    def test_integer_expressions_match_sympy(self):
        rng = random.Random(20240611)
        for _ in range(300):
            expr = _random_expression(rng, division=False)
            with self.subTest(expr=expr):
                value = Calculator().calculate(expr)
                self.assertIsInstance(value, int)
                self.assertEqual(value, int(parse_expr(expr)))

    def test_float_division_close_to_sympy(self):
        rng = random.Random(31)
        for _ in range(200):
            # Flat products and quotients keep float rounding error relative
            expr = " ".join(
                [str(rng.randint(1, 99))]
                + [f"{rng.choice('*/')} {rng.randint(1, 9)}" for _ in range(rng.randint(1, 5))]
            )
            with self.subTest(expr=expr):
                value = Calculator().calculate(expr)
                expected = float(parse_expr(expr))
                self.assertAlmostEqual(value / expected, 1.0, places=12)

    def test_exact_mode_matches_sympy(self):
        rng = random.Random(7)
        for _ in range(300):
            expr = _random_expression(rng)
            with self.subTest(expr=expr):
                value = Calculator(arithmetic="exact").calculate(expr)
                self.assertEqual(value, parse_expr(expr))
                self.assertIsInstance(value, sp.Rational)


class TestParserFuzzing(unittest.TestCase):
    """Random garbage must only ever raise calculator errors."""

    def test_random_strings(self):
        rng = random.Random(99)
        for _ in range(300):
            random_str = "".join(rng.choices(string.printable, k=rng.randint(1, 40)))
            calc = Calculator()
            try:
                calc.calculate(random_str)
            except CalculatorError:
                self.assertEqual(calc.get_result(), 0)

    def test_random_arithmetic_alphabet(self):
        rng = random.Random(5)
        for _ in range(500):
            random_str = "".join(rng.choices("0123456789+-*/(). ", k=rng.randint(1, 25)))
            calc = Calculator()
            calc.add(3)
            try:
                calc.calculate(random_str)
            except CalculatorError:
                self.assertEqual(calc.get_result(), 3)

    def test_malformed_expressions(self):
        malformed = ["(((", ")))", "1++", "*/1", "", "   ", ".", "1..2", "()"]
        for expr in malformed:
            with self.subTest(expr=expr):
                with self.assertRaises(CalculatorError):
                    Calculator().calculate(expr)


if __name__ == "__main__":
    unittest.main()
