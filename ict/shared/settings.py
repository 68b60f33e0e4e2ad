"""Tool-wide settings with optional YAML overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import SettingsError

SETTINGS_ENV_VAR = "ICT_SETTINGS"
DEFAULT_SETTINGS_FILE = "ict.yaml"

# Number of suggestions shown for a mistyped target
FUZZY_MATCHES_COUNT = 7


@dataclass(frozen=True, slots=True)
class Settings:
    """Constants that shape the assembled runner command."""

    runner: str = "bazel"
    subcommand: str = "test"
    config_flag: str = "--config=systest"
    universe_query: str = "tests(//rs/tests/...)"
    suggestion_count: int = FUZZY_MATCHES_COUNT
    keepalive_timeout: int = 3600


DEFAULT_SETTINGS = Settings()

_FIELD_TYPES: dict[str, type] = {
    "runner": str,
    "subcommand": str,
    "config_flag": str,
    "universe_query": str,
    "suggestion_count": int,
    "keepalive_timeout": int,
}


def load_settings(settings_path: Path) -> Settings:
    """Load settings from a YAML file.

    Keys missing from the file keep their defaults. Unknown keys are
    reported and ignored.

    Args:
        settings_path: Path to the YAML file.

    Returns:
        The merged settings.

    Raises:
        SettingsError: If the file cannot be read, parsed, or has values
            of the wrong type.
    """
    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Failed to read settings file: {e}", str(settings_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML: {e}", str(settings_path)) from e

    if data is None:
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        raise SettingsError("Settings root must be a mapping", str(settings_path))

    known = {f.name for f in fields(Settings)}
    overrides: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            print(f"Warning: ignoring unknown setting '{key}' in {settings_path}")
            continue
        expected = _FIELD_TYPES[key]
        # bool is an int subclass, reject it explicitly
        if not isinstance(value, expected) or isinstance(value, bool):
            raise SettingsError(
                f"Setting '{key}' must be of type {expected.__name__}",
                str(settings_path),
            )
        overrides[key] = value

    if overrides.get("suggestion_count", 0) < 0:
        raise SettingsError("Setting 'suggestion_count' must not be negative", str(settings_path))

    return replace(DEFAULT_SETTINGS, **overrides)


def find_settings_file(explicit: Path | None = None, cwd: Path | None = None) -> Path | None:
    """Pick the settings file to use, if any.

    Order: explicit path, then $ICT_SETTINGS, then ict.yaml in cwd.
    """
    if explicit is not None:
        return explicit
    from_env = os.environ.get(SETTINGS_ENV_VAR)
    if from_env:
        return Path(from_env)
    candidate = (cwd or Path.cwd()) / DEFAULT_SETTINGS_FILE
    if candidate.is_file():
        return candidate
    return None


def resolve_settings(explicit: Path | None = None, cwd: Path | None = None) -> Settings:
    """Return settings from the first available source, or the defaults."""
    path = find_settings_file(explicit, cwd)
    if path is None:
        return DEFAULT_SETTINGS
    return load_settings(path)
