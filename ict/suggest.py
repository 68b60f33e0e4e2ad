"""Fuzzy suggestions for mistyped target names."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from ict.shared.settings import FUZZY_MATCHES_COUNT


@lru_cache(maxsize=4096)
def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings, ignoring case.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("Test", "test")
        0
    """
    a = a.casefold()
    b = b.casefold()
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (char_a != char_b),
            ))
        previous = current
    return previous[-1]


def target_distance(query: str, candidate: str) -> int:
    """Score a candidate label against the query, lower is closer.

    A label like ``//pkg:name`` is also compared by its ``name`` part,
    so a bare test name still finds its full label.
    """
    distance = edit_distance(query, candidate)
    _, sep, name = candidate.rpartition(":")
    if sep and name:
        distance = min(distance, edit_distance(query, name))
    return distance


def suggest(
    query: str,
    universe: Iterable[str],
    limit: int = FUZZY_MATCHES_COUNT,
) -> tuple[str, ...]:
    """Return up to ``limit`` candidates closest to ``query``.

    Candidates are ordered by distance, ties broken lexicographically, so
    identical inputs always give the identical list.
    """
    if limit <= 0:
        return ()
    ranked = sorted(
        set(universe),
        key=lambda candidate: (target_distance(query, candidate), candidate),
    )
    return tuple(ranked[:limit])
