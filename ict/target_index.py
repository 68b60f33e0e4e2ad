"""Access to the set of known test targets."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, Protocol

from ict.shared.errors import TargetLookupError, UniverseQueryError
from ict.shared.settings import DEFAULT_SETTINGS, Settings

# stderr fragments bazel prints when a label is simply absent
_MISSING_TARGET_MARKERS = (
    "no such target",
    "no such package",
    "not declared",
)


class TargetIndex(Protocol):
    """Answers questions about targets in the build graph."""

    def exists(self, target: str) -> bool: ...

    def enumerate(self) -> set[str]: ...


class StaticTargetIndex:
    """In-memory target index over a fixed set of labels."""

    def __init__(self, targets: Iterable[str]) -> None:
        self.targets = frozenset(targets)

    def exists(self, target: str) -> bool:
        return target in self.targets

    def enumerate(self) -> set[str]:
        return set(self.targets)

    @classmethod
    def from_file(cls, path: Path) -> StaticTargetIndex:
        """Read one label per line, skipping blanks and # comments."""
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise TargetLookupError(f"Failed to read targets file: {e}") from e
        targets = []
        for line in lines:
            line = line.strip()
            if line and not line.startswith("#"):
                targets.append(line)
        return cls(targets)


class BazelTargetIndex:
    """Target index backed by ``bazel query``."""

    def __init__(
        self,
        settings: Settings = DEFAULT_SETTINGS,
        cwd: Path | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.settings = settings
        self.cwd = cwd
        self.verbose = verbose

    def _query(self, expression: str) -> subprocess.CompletedProcess:
        command = [self.settings.runner, "query", expression]
        if self.verbose:
            print(f"$ {' '.join(command)}")
        return subprocess.run(
            command,
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=False,
        )

    def exists(self, target: str) -> bool:
        try:
            result = self._query(target)
        except OSError as e:
            raise TargetLookupError(str(e), target) from e

        if result.returncode == 0:
            return True
        stderr = result.stderr or ""
        if any(marker in stderr for marker in _MISSING_TARGET_MARKERS):
            return False
        raise TargetLookupError(
            stderr.strip() or f"query exited with code {result.returncode}",
            target,
        )

    def enumerate(self) -> set[str]:
        expression = self.settings.universe_query
        try:
            result = self._query(expression)
        except OSError as e:
            raise UniverseQueryError(str(e), expression) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise UniverseQueryError(
                stderr or f"query exited with code {result.returncode}",
                expression,
            )
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}
