"""Shared utilities for the ict command line."""

from .errors import (
    IctError,
    TargetLookupError,
    UniverseQueryError,
    TargetNotFoundError,
    RunnerExecutionError,
    SettingsError,
)
from .settings import (
    DEFAULT_SETTINGS,
    FUZZY_MATCHES_COUNT,
    Settings,
    load_settings,
    resolve_settings,
)

__all__ = [
    # Errors
    "IctError",
    "TargetLookupError",
    "UniverseQueryError",
    "TargetNotFoundError",
    "RunnerExecutionError",
    "SettingsError",
    # Settings
    "DEFAULT_SETTINGS",
    "FUZZY_MATCHES_COUNT",
    "Settings",
    "load_settings",
    "resolve_settings",
]
