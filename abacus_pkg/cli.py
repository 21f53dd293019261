"""Command line interface for Abacus.

Usage:
    abacus                      # Interactive REPL over one accumulator
    abacus -e "2 + 3 * 4"       # Evaluate one expression and exit
    abacus -e "1/3" --exact     # Exact rational arithmetic
    abacus --format json -e "10/0"
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable

from . import config as _config
from .api import evaluate
from .calculator import Calculator
from .config import VERSION
from .logging_config import get_logger, setup_logging
from .parser import format_number
from .types import CalculatorError, EvalResult

logger = get_logger("cli")

REPL_COMMANDS = {
    "add": "add",
    "sub": "subtract",
    "mul": "multiply",
    "div": "divide",
}

HELP_TEXT = """Commands:
  <expression>    Evaluate, e.g. (2 + 3) * 4, and store the value
  add <expr>      Add to the stored value
  sub <expr>      Subtract from the stored value
  mul <expr>      Multiply the stored value
  div <expr>      Divide the stored value
  result          Show the stored value
  clear           Reset the stored value to 0
  help            Show this help
  quit, exit      Leave
"""


def print_result(res: EvalResult, output_format: str = "human") -> None:
    """Print a result in the specified format.

    Args:
        res: Evaluation result
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    print(res.result)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Abacus health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Precedence", "2 + 3 * 4", "float", "14"),
        ("Parentheses", "(2 + 3) * 4", "float", "20"),
        ("Exact arithmetic", "1/3*3", "exact", "1"),
        ("Division by zero detection", "10/(5-5)", "float", None),
    ]
    for label, expr, arithmetic, expected in checks:
        try:
            res = evaluate(expr, arithmetic=arithmetic)
        except Exception as e:
            print(f"[FAIL] {label} check failed: {e}")
            checks_failed += 1
            continue
        if expected is None:
            ok = res.error_code == "DIVISION_BY_ZERO"
        else:
            ok = res.ok and res.result == expected
        if ok:
            print(f"[OK] {label} works")
            checks_passed += 1
        else:
            print(f"[FAIL] {label} check failed: {res!r}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def handle_line(calc: Calculator, line: str, output_format: str = "human") -> bool:
    """Execute one REPL line against ``calc``.

    Returns:
        False when the user asked to leave, True otherwise
    """
    line = line.strip()
    if not line:
        return True
    command, _, argument = line.partition(" ")
    command = command.lower()

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP_TEXT)
        return True

    try:
        if command == "clear":
            calc.clear()
        elif command == "result":
            pass
        elif command in REPL_COMMANDS:
            if not argument.strip():
                raise CalculatorError(f"'{command}' needs an operand", "MISSING_OPERAND")
            # Operands may themselves be expressions; evaluate on a scratch instance
            operand = Calculator(calc.arithmetic.name).calculate(argument)
            getattr(calc, REPL_COMMANDS[command])(operand)
        else:
            calc.calculate(line)
    except CalculatorError as e:
        logger.debug("REPL input %r failed: %s", line, e)
        print_result(EvalResult(ok=False, error=str(e), error_code=e.code), output_format)
        return True

    value = calc.get_result()
    print_result(EvalResult(ok=True, result=format_number(value), value=value), output_format)
    return True


def repl_loop(
    calc: Calculator | None = None,
    output_format: str = "human",
    input_func: Callable[[str], str] = input,
) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    if calc is None:
        calc = Calculator()
    print("Abacus - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input_func(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not handle_line(calc, raw, output_format):
            break


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Abacus CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="abacus")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Use exact rational arithmetic instead of floating point",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)
    if args.exact:
        _config.ARITHMETIC = "exact"

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_expr is not None:
        res = evaluate(args.eval_expr)
        print_result(res, args.format)
        return 0 if res.ok else 1

    logger.info("Starting REPL with %s arithmetic", _config.ARITHMETIC)
    repl_loop(output_format=args.format)
    return 0


def main() -> None:
    sys.exit(main_entry())


if __name__ == "__main__":
    main()
