"""Fuzzy search, scoring and highlighting utilities."""

from .advanced import FieldMatch, FieldSearchResult, field_search, multi_query_search, search_suggestions
from .distance import edit_distance, fuzzy_score, similarity
from .fuzzy import FuzzySearchOptions, SearchResult, fuzzy_search, resolve_field
from .highlight import HighlightSegment, find_match_spans, highlight_matches, highlight_spans

__all__ = [
    "FieldMatch",
    "FieldSearchResult",
    "FuzzySearchOptions",
    "HighlightSegment",
    "SearchResult",
    "edit_distance",
    "field_search",
    "find_match_spans",
    "fuzzy_score",
    "fuzzy_search",
    "highlight_matches",
    "highlight_spans",
    "multi_query_search",
    "resolve_field",
    "search_suggestions",
    "similarity",
]
