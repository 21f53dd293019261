"""Centralized configuration for Abacus.

This module defines:
- Input validation limits (length, nesting depth)
- Cache sizes for the parse cache
- Output precision and default arithmetic mode
- Regex patterns used when sanitizing expressions

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with ABACUS_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("abacus")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("ABACUS_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("ABACUS_MAX_EXPRESSION_DEPTH", "100")
)  # nesting of parentheses and unary signs

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("ABACUS_CACHE_SIZE_PARSE", "1024"))

# Output configuration
OUTPUT_PRECISION = int(
    os.getenv("ABACUS_OUTPUT_PRECISION", "12")
)  # significant digits for human output

# Arithmetic mode: "float" (int/float semantics) or "exact" (SymPy rationals)
ARITHMETIC_MODES = ("float", "exact")
ARITHMETIC = os.getenv("ABACUS_ARITHMETIC", "float").lower()
if ARITHMETIC not in ARITHMETIC_MODES:
    ARITHMETIC = "float"

WHITESPACE_REGEX = re.compile(r"\s+")
# Applied to the raw input so reported positions match what the caller typed
INVALID_CHAR_REGEX = re.compile(r"[^0-9+\-*/().\s]")
# A '/' directly followed by a literal 0 that is not the start of a longer integer
LITERAL_ZERO_DIVISION_REGEX = re.compile(r"/0(?!\d)")
NUMBER_REGEX = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
