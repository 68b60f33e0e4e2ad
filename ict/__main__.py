#!/usr/bin/env python3
"""
Integration and system test command line.

Usage:
    python -m ict <command> [options]

Commands:
    test        Run a system_test target with Bazel (aliases: system_test, t)

Examples:
    python -m ict test //rs/tests:basic_health_test
    python -m ict test //rs/tests:basic_health_test --dry-run -- --test_output=errors
    python -m ict t basic_health_test -k -i health
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure ict is importable
ICT_DIR = Path(__file__).parent
if str(ICT_DIR.parent) not in sys.path:
    sys.path.insert(0, str(ICT_DIR.parent))


def cmd_test(args: list[str]) -> int:
    """Run a system_test target."""
    from ict import runner
    try:
        return runner.main(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "test": (cmd_test, "Run a system_test target with Bazel"),
}

ALIASES = {
    "system_test": "test",
    "t": "test",
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = ALIASES.get(sys.argv[1], sys.argv[1])
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {sys.argv[1]}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
