"""Split text into highlighted and plain runs for presentation."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class HighlightSegment:
    text: str
    highlight: bool


def highlight_matches(text: str, query: str) -> List[HighlightSegment]:
    """Mark every case-insensitive, non-overlapping occurrence of *query*.

    Joining the ``text`` of the returned segments always reproduces *text*.
    """

    if not query.strip():
        return [HighlightSegment(text=text, highlight=False)]

    segments: List[HighlightSegment] = []
    last_index = 0
    for match in re.finditer(re.escape(query), text, flags=re.IGNORECASE):
        start, end = match.span()
        if start > last_index:
            segments.append(HighlightSegment(text=text[last_index:start], highlight=False))
        segments.append(HighlightSegment(text=match.group(0), highlight=True))
        last_index = end

    if last_index < len(text):
        segments.append(HighlightSegment(text=text[last_index:], highlight=False))

    return segments or [HighlightSegment(text=text, highlight=False)]


def find_match_spans(query: str, text: str) -> List[Tuple[int, int]]:
    """Every case-insensitive occurrence of *query*, overlaps included."""

    spans: List[Tuple[int, int]] = []
    if not query:
        return spans
    needle = query.lower()
    haystack = text.lower()
    start = haystack.find(needle)
    while start != -1:
        spans.append((start, start + len(needle)))
        start = haystack.find(needle, start + 1)
    return spans


def highlight_spans(text: str, spans: Sequence[Tuple[int, int]]) -> List[HighlightSegment]:
    """Split *text* on *spans*, merging spans that overlap or touch."""

    merged: List[List[int]] = []
    for start, end in sorted(spans):
        if not merged or start > merged[-1][1]:
            merged.append([start, end])
        else:
            merged[-1][1] = max(merged[-1][1], end)

    segments: List[HighlightSegment] = []
    last_index = 0
    for start, end in merged:
        if start > last_index:
            segments.append(HighlightSegment(text=text[last_index:start], highlight=False))
        segments.append(HighlightSegment(text=text[start:end], highlight=True))
        last_index = end
    if last_index < len(text):
        segments.append(HighlightSegment(text=text[last_index:], highlight=False))
    return segments or [HighlightSegment(text=text, highlight=False)]
