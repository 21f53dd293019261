"""Main entry point for running abacus_pkg as a module.

This allows running Abacus with:
    python -m abacus_pkg
    python -m abacus_pkg --health-check
    python -m abacus_pkg -e "2+2"

This is equivalent to running:
    python -m abacus_pkg.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
