"""Edit distance based string similarity."""
from __future__ import annotations

from functools import lru_cache

_CACHE_SIZE = 1000


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between *a* and *b*.

    Only two rows of the DP table are kept, sized to the shorter string.
    """

    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return a 0..1 closeness score where 1.0 means identical."""

    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if not longer:
        return 1.0
    if longer == shorter:
        return 1.0
    return (len(longer) - edit_distance(longer, shorter)) / len(longer)


@lru_cache(maxsize=_CACHE_SIZE)
def cached_similarity(a: str, b: str) -> float:
    return similarity(a, b)


@lru_cache(maxsize=_CACHE_SIZE)
def fuzzy_score(query: str, text: str) -> float:
    """Score *query* against a whole field value, case-insensitively.

    Containment scores 0.9 and equality 1.0. A word of *text* equal to or
    starting with *query* is already containment, so those hits land in the
    0.9 tier. Anything else falls back to edit distance: 0.7 x similarity
    when similarity is above 0.5, and 0 when the lengths differ by more than
    half of the longer string.
    """

    if not query or not text:
        return 0.0
    query = query.lower()
    text = text.lower()
    if text == query:
        return 1.0
    if query in text:
        return 0.9

    longer = max(len(query), len(text))
    if (longer - min(len(query), len(text))) / longer > 0.5:
        return 0.0
    closeness = 1 - edit_distance(query, text) / longer
    return closeness * 0.7 if closeness > 0.5 else 0.0
