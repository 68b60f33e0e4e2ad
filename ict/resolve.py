"""Check that a target exists, or work out what the user meant."""

from __future__ import annotations

from dataclasses import dataclass

from ict.shared.errors import TargetNotFoundError
from ict.shared.settings import FUZZY_MATCHES_COUNT
from ict.suggest import suggest
from ict.target_index import TargetIndex


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a target."""

    target: str
    exists: bool
    suggestions: tuple[str, ...] = ()


def resolve(
    target: str,
    index: TargetIndex,
    *,
    limit: int = FUZZY_MATCHES_COUNT,
) -> Resolution:
    """Resolve a target against the index.

    Lookup and enumeration errors from the index propagate unchanged.
    The full target list is only queried when the target is missing.
    """
    if index.exists(target):
        return Resolution(target, exists=True)
    universe = index.enumerate()
    return Resolution(target, exists=False, suggestions=suggest(target, universe, limit))


def ensure_target(
    target: str,
    index: TargetIndex,
    *,
    limit: int = FUZZY_MATCHES_COUNT,
) -> None:
    """Raise TargetNotFoundError unless the target exists."""
    resolution = resolve(target, index, limit=limit)
    if not resolution.exists:
        raise TargetNotFoundError(target, resolution.suggestions)
