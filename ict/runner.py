#!/usr/bin/env python3
"""
Run a system_test target with Bazel.

Checks that the target exists (suggesting close matches when it does
not), prints the raw Bazel command and runs it. Everything after `--`
is passed to Bazel unchanged.

Examples:
    ict test //rs/tests:basic_health_test
    ict test //rs/tests:basic_health_test --dry-run -- --test_tmpdir=./tmp --test_output=errors
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from ict.assemble import RunConfiguration, assemble
from ict.invoke import run
from ict.resolve import ensure_target
from ict.shared.errors import IctError
from ict.shared.settings import Settings, resolve_settings
from ict.target_index import BazelTargetIndex, StaticTargetIndex, TargetIndex

PASSTHROUGH_SEPARATOR = "--"


def split_passthrough(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split arguments at the first `--` into (own args, passthrough args)."""
    args = list(args)
    if PASSTHROUGH_SEPARATOR in args:
        index = args.index(PASSTHROUGH_SEPARATOR)
        return args[:index], args[index + 1:]
    return args, []


def build_parser(prog: str = "ict test") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} <system_test_target> [flags] [-- <bazel_args>]",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "target",
        help="Bazel label of the system_test target",
    )
    parser.add_argument(
        "extra_args",
        nargs="*",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print raw Bazel command to be invoked without execution",
    )
    parser.add_argument(
        "--keepalive",
        "-k",
        action="store_true",
        help="Keep test system alive for 60 minutes",
    )
    parser.add_argument(
        "--include-tests",
        "-i",
        type=str,
        default="",
        help="Execute only those test functions which contain a substring",
    )
    parser.add_argument(
        "--farm-url",
        type=str,
        default="",
        help="Use a custom url for the Farm webservice",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Path to an ict.yaml settings file",
    )
    parser.add_argument(
        "--targets-file",
        type=Path,
        help="Resolve targets against a file of labels instead of querying Bazel",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print the Bazel queries used to resolve the target",
    )
    return parser


def make_index(args: argparse.Namespace, settings: Settings) -> TargetIndex:
    if args.targets_file is not None:
        return StaticTargetIndex.from_file(args.targets_file)
    return BazelTargetIndex(settings, verbose=args.verbose)


def main(argv: Sequence[str] | None = None, prog: str = "ict test") -> int:
    if argv is None:
        argv = sys.argv[1:]
    own_args, passthrough = split_passthrough(argv)

    parser = build_parser(prog)
    args = parser.parse_intermixed_args(own_args)
    if not args.target:
        parser.error("target must not be empty")

    cfg = RunConfiguration(
        dry_run=args.dry_run,
        keep_alive=args.keepalive,
        filter_tests=args.include_tests,
        farm_base_url=args.farm_url,
    )

    try:
        settings = resolve_settings(args.settings)
        index = make_index(args, settings)
        ensure_target(args.target, index, limit=settings.suggestion_count)
        command = assemble(
            args.target,
            cfg,
            [*args.extra_args, *passthrough],
            settings,
        )
        return run(command, dry_run=cfg.dry_run)
    except IctError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
