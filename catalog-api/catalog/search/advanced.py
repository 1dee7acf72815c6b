"""Search helpers layered on top of :func:`fuzzy_search`."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .distance import fuzzy_score
from .fuzzy import DEFAULT_LIMIT, DEFAULT_THRESHOLD, FuzzySearchOptions, SearchResult, fuzzy_search, resolve_field
from .highlight import HighlightSegment, find_match_spans, highlight_spans

SUGGESTION_THRESHOLD = 0.3


@dataclass
class FieldMatch:
    field: str
    spans: List[Tuple[int, int]]
    score: float


@dataclass
class FieldSearchResult:
    item: Any
    score: float
    matches: List[FieldMatch] = field(default_factory=list)
    highlights: Dict[str, List[HighlightSegment]] = field(default_factory=dict)


def multi_query_search(
    items: Sequence[Any],
    queries: Sequence[str],
    options: FuzzySearchOptions,
) -> List[SearchResult]:
    """Return items matching *every* query, ranked by the first one."""

    if not queries:
        return []

    results = fuzzy_search(items, queries[0], options)
    for query in queries[1:]:
        accepted = {id(result.item) for result in fuzzy_search(items, query, options)}
        results = [result for result in results if id(result.item) in accepted]
    return results


def field_search(
    items: Sequence[Any],
    query: str,
    fields: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
) -> List[FieldSearchResult]:
    """Score each field on its own and average the fields that match.

    A field matches when its :func:`fuzzy_score` reaches *threshold*. Items
    with no matching field are dropped; the rest are sorted best first with
    ties in input order.
    """

    query = query.strip()
    if not query:
        return []

    results: List[FieldSearchResult] = []
    for item in items:
        matches: List[FieldMatch] = []
        highlights: Dict[str, List[HighlightSegment]] = {}
        for path in fields:
            value = resolve_field(item, path)
            if not value:
                continue
            score = fuzzy_score(query, value)
            if score >= threshold:
                spans = find_match_spans(query, value)
                matches.append(FieldMatch(field=path, spans=spans, score=score))
                highlights[path] = highlight_spans(value, spans)
        if matches:
            average = sum(match.score for match in matches) / len(matches)
            results.append(FieldSearchResult(item=item, score=average, matches=matches, highlights=highlights))

    results.sort(key=lambda result: -result.score)
    return results[:limit]


def search_suggestions(query: str, recent_searches: Sequence[str], limit: int = 5) -> List[str]:
    """Rank previously issued searches against the text typed so far."""

    if not query.strip():
        return list(recent_searches[:limit])

    scored = [(search, fuzzy_score(query.strip(), search)) for search in recent_searches]
    kept = [pair for pair in scored if pair[1] > SUGGESTION_THRESHOLD]
    kept.sort(key=lambda pair: -pair[1])
    return [search for search, _ in kept[:limit]]
