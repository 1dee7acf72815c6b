"""Ranked fuzzy search over loosely-typed catalog records."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from .distance import cached_similarity

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.3
DEFAULT_LIMIT = 50
SUBSTRING_BOOST = 0.5


class _Missing:
    """Marker for a field path that does not resolve."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class FuzzySearchOptions:
    keys: Sequence[str] = ()
    threshold: float = DEFAULT_THRESHOLD
    limit: int = DEFAULT_LIMIT


@dataclass
class SearchResult:
    item: Any
    score: float
    matches: List[str] = field(default_factory=list)


def get_by_path(record: Any, path: str) -> Any:
    """Walk a dot-separated *path* through nested mappings.

    Returns :data:`MISSING` when a segment is absent or a non-mapping is hit
    before the path is exhausted.
    """

    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return MISSING
        current = current.get(part, MISSING)
        if current is MISSING:
            return MISSING
    return current


def _stringify(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(_stringify(element) for element in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_field(record: Any, path: str) -> str:
    """Return the text used for matching *path* on *record* (original case)."""

    return _stringify(get_by_path(record, path))


def fuzzy_search(
    items: Sequence[Any],
    query: str,
    options: FuzzySearchOptions,
) -> List[SearchResult]:
    """Rank *items* against *query* across ``options.keys``.

    Literal containment beats per-word edit-distance closeness: a field that
    contains the query scores ``len(query) / len(field) + 0.5`` (capped at 1)
    and is not fuzzily matched.
    """

    threshold = options.threshold
    limit = options.limit
    normalised_query = (query or "").strip().lower()

    if not normalised_query:
        return [SearchResult(item=item, score=1.0, matches=[]) for item in list(items)[:limit]]

    results: List[SearchResult] = []
    for item in items:
        best_score = 0.0
        matches: List[str] = []
        for key in options.keys:
            text = resolve_field(item, key).lower()

            if normalised_query in text:
                exact_score = len(normalised_query) / len(text)
                candidate = min(1.0, exact_score + SUBSTRING_BOOST)
                if candidate > best_score:
                    best_score = candidate
                    matches.append(key)
                continue

            for word in text.split():
                score = cached_similarity(normalised_query, word)
                if score > threshold and score > best_score:
                    best_score = score
                    if key not in matches:
                        matches.append(key)

        if best_score > threshold:
            results.append(SearchResult(item=item, score=best_score, matches=matches))

    # list.sort is stable, so equal scores keep input order.
    results.sort(key=lambda result: -result.score)
    logger.debug(
        "fuzzy_search query=%r candidates=%d accepted=%d", normalised_query, len(items), len(results)
    )
    return results[:limit]
