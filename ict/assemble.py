"""Build the runner command line for a system test target.

The command is produced by folding an ordered list of rules over the
argument vector. Each rule only appends, and later rules may look at
what earlier ones produced, so the order of RULES is part of the
contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ict.shared.settings import DEFAULT_SETTINGS, Settings

# Any argument containing this token counts as the user choosing a
# caching mode, e.g. "--cache_test_results=yes". Substring match, not exact.
CACHE_RESULTS_TOKEN = "--cache_test_results"
NO_CACHE_FLAG = "--cache_test_results=no"
INCLUDE_TESTS_ARG = "--test_arg=--include-tests="
FARM_BASE_URL_ARG = "--test_arg=--farm-base-url="
TEST_TIMEOUT_ARG = "--test_timeout="
DEBUG_KEEPALIVE_ARG = "--test_arg=--debug-keepalive"


@dataclass(frozen=True)
class RunConfiguration:
    """Options for a single test invocation."""

    dry_run: bool = False
    keep_alive: bool = False
    filter_tests: str = ""
    farm_base_url: str = ""


Rule = Callable[[tuple[str, ...], RunConfiguration, Settings], tuple[str, ...]]


def add_default_cache_flag(
    argv: tuple[str, ...], cfg: RunConfiguration, settings: Settings
) -> tuple[str, ...]:
    """Disable result caching unless an argument already mentions it."""
    if any(CACHE_RESULTS_TOKEN in arg for arg in argv):
        return argv
    return argv + (NO_CACHE_FLAG,)


def add_test_filter(
    argv: tuple[str, ...], cfg: RunConfiguration, settings: Settings
) -> tuple[str, ...]:
    if not cfg.filter_tests:
        return argv
    return argv + (INCLUDE_TESTS_ARG + cfg.filter_tests,)


def add_farm_url(
    argv: tuple[str, ...], cfg: RunConfiguration, settings: Settings
) -> tuple[str, ...]:
    if not cfg.farm_base_url:
        return argv
    return argv + (FARM_BASE_URL_ARG + cfg.farm_base_url,)


def add_keepalive(
    argv: tuple[str, ...], cfg: RunConfiguration, settings: Settings
) -> tuple[str, ...]:
    """Extend the test timeout and ask the test driver to keep the setup alive."""
    if not cfg.keep_alive:
        return argv
    return argv + (f"{TEST_TIMEOUT_ARG}{settings.keepalive_timeout}", DEBUG_KEEPALIVE_ARG)


RULES: tuple[Rule, ...] = (
    add_default_cache_flag,
    add_test_filter,
    add_farm_url,
    add_keepalive,
)


def base_command(target: str, settings: Settings = DEFAULT_SETTINGS) -> tuple[str, ...]:
    """The fixed prefix: runner, subcommand, target and config flag."""
    return (settings.runner, settings.subcommand, target, settings.config_flag)


def assemble(
    target: str,
    cfg: RunConfiguration,
    passthrough: Sequence[str] = (),
    settings: Settings = DEFAULT_SETTINGS,
) -> tuple[str, ...]:
    """Assemble the full runner command.

    Args:
        target: The resolved target label.
        cfg: Options for this invocation.
        passthrough: Arguments given after ``--``, appended verbatim.
        settings: Tool-wide constants for the base command.

    Returns:
        The argument vector, ready to execute.
    """
    argv = base_command(target, settings) + tuple(passthrough)
    for rule in RULES:
        argv = rule(argv, cfg, settings)
    return argv


def format_command(argv: Sequence[str]) -> str:
    """Render an argument vector as a single line."""
    return " ".join(argv)
