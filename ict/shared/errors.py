"""Custom exceptions for the ict command line."""

from __future__ import annotations

from typing import Sequence


class IctError(Exception):
    """Base exception for ict errors."""

    def __init__(self, message: str, target: str | None = None) -> None:
        self.target = target
        super().__init__(message)


class TargetLookupError(IctError):
    """Raised when checking whether a target exists fails."""

    def __init__(self, message: str, target: str | None = None) -> None:
        full_message = message if not target else f"Failed to look up `{target}`: {message}"
        super().__init__(full_message, target)


class UniverseQueryError(IctError):
    """Raised when enumerating all known targets fails."""

    def __init__(self, message: str, query: str | None = None) -> None:
        self.query = query
        if query:
            message = f"Query '{query}' failed: {message}"
        super().__init__(message)


class TargetNotFoundError(IctError):
    """Raised when a target does not exist in the build graph."""

    def __init__(self, target: str, suggestions: Sequence[str] = ()) -> None:
        self.suggestions = tuple(suggestions)
        if self.suggestions:
            message = (
                f"No test target `{target}` was found: \n"
                "Did you mean any of:\n" + "\n".join(self.suggestions)
            )
        else:
            message = f"No test target `{target}` was found"
        super().__init__(message, target)


class RunnerExecutionError(IctError):
    """Raised when the test runner process cannot be started."""

    def __init__(self, message: str, command: Sequence[str] = ()) -> None:
        self.command = tuple(command)
        if self.command:
            message = f"Could not run '{self.command[0]}': {message}"
        super().__init__(message)


class SettingsError(IctError):
    """Raised when a settings file cannot be read or is invalid."""

    def __init__(self, message: str, settings_path: str | None = None) -> None:
        self.settings_path = settings_path
        full_message = message if not settings_path else f"[{settings_path}] {message}"
        super().__init__(full_message)
