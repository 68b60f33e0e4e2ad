#!/usr/bin/env python3
"""
Wrapper for the ict command line.

This is a convenience wrapper that forwards to the ict module.
Run with --help to see available commands.

Usage:
    python run_ict.py <command> [options]
    ./run_ict.py <command> [options]  (on Unix with execute permission)

Commands:
    test        Run a system_test target with Bazel

Examples:
    python run_ict.py test //rs/tests:basic_health_test
    python run_ict.py test //rs/tests:basic_health_test --dry-run -- --test_output=errors
"""

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to the ict module.

    Bazel queries run in the caller's directory, so the working
    directory is left alone.
    """
    return subprocess.call(
        [sys.executable, str(ROOT / "ict" / "__main__.py")] + sys.argv[1:],
    )


if __name__ == "__main__":
    sys.exit(main())
