"""Search, suggestion and highlight endpoints."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator

from ..content.store import MODEL_SEARCH_KEYS, NARRATIVE_SEARCH_KEYS, ContentStore
from ..errors import CatalogError, ErrorType
from ..search import (
    FieldSearchResult,
    SearchResult,
    highlight_matches,
    multi_query_search,
    resolve_field,
    search_suggestions,
)
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

MAX_LIMIT = 500


class SegmentPayload(BaseModel):
    text: str
    highlight: bool


class SearchHit(BaseModel):
    item: Dict[str, Any]
    score: float
    matches: List[str]
    highlights: Dict[str, List[SegmentPayload]] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    query: str
    total: int
    results: List[SearchHit]


class FieldMatchPayload(BaseModel):
    field: str
    spans: List[Tuple[int, int]]
    score: float


class FieldSearchHit(BaseModel):
    item: Dict[str, Any]
    score: float
    matches: List[FieldMatchPayload]
    highlights: Dict[str, List[SegmentPayload]]


class FieldSearchResponse(BaseModel):
    query: str
    total: int
    results: List[FieldSearchHit]


class MultiSearchRequest(BaseModel):
    collection: Literal["models", "narratives"] = "models"
    queries: List[str]
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_LIMIT)

    @field_validator("queries")
    @classmethod
    def _strip_queries(cls, value: List[str]) -> List[str]:
        return [query.strip() for query in value if query and query.strip()]


class SuggestionRequest(BaseModel):
    query: str = ""
    recent_searches: List[str] = Field(default_factory=list)
    limit: int = Field(default=5, ge=1, le=50)


class SuggestionResponse(BaseModel):
    suggestions: List[str]


class HighlightRequest(BaseModel):
    text: str
    query: str = ""


class HighlightResponse(BaseModel):
    segments: List[SegmentPayload]


def _segments(text: str, query: str) -> List[SegmentPayload]:
    return [SegmentPayload(text=s.text, highlight=s.highlight) for s in highlight_matches(text, query)]


def _to_hits(results: List[SearchResult], query: str) -> List[SearchHit]:
    hits: List[SearchHit] = []
    for result in results:
        highlights = {key: _segments(resolve_field(result.item, key), query.strip()) for key in result.matches}
        hits.append(
            SearchHit(item=result.item, score=result.score, matches=list(result.matches), highlights=highlights)
        )
    return hits


def _to_field_hits(results: List[FieldSearchResult]) -> List[FieldSearchHit]:
    return [
        FieldSearchHit(
            item=result.item,
            score=result.score,
            matches=[FieldMatchPayload(field=m.field, spans=m.spans, score=m.score) for m in result.matches],
            highlights={
                path: [SegmentPayload(text=s.text, highlight=s.highlight) for s in segments]
                for path, segments in result.highlights.items()
            },
        )
        for result in results
    ]


def _clean_keys(keys: Optional[List[str]]) -> Optional[List[str]]:
    if not keys:
        return None
    cleaned = [key.strip() for key in keys if key and key.strip()]
    if not cleaned:
        raise CatalogError(ErrorType.INVALID_QUERY, "keys must contain at least one field path")
    return cleaned


@router.get("/search/models", response_model=SearchResponse)
def search_models(
    q: str = "",
    keys: Optional[List[str]] = Query(default=None),
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_LIMIT),
    store: ContentStore = Depends(get_store),
) -> SearchResponse:
    results = store.search_models(q, keys=_clean_keys(keys), threshold=threshold, limit=limit)
    logger.debug("search_models q=%r hits=%d", q, len(results))
    return SearchResponse(query=q, total=len(results), results=_to_hits(results, q))


@router.get("/search/narratives", response_model=SearchResponse)
def search_narratives(
    q: str = "",
    keys: Optional[List[str]] = Query(default=None),
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_LIMIT),
    store: ContentStore = Depends(get_store),
) -> SearchResponse:
    results = store.search_narratives(q, keys=_clean_keys(keys), threshold=threshold, limit=limit)
    logger.debug("search_narratives q=%r hits=%d", q, len(results))
    return SearchResponse(query=q, total=len(results), results=_to_hits(results, q))


@router.get("/search/fields", response_model=FieldSearchResponse)
def search_fields(
    q: str = "",
    collection: Literal["models", "narratives"] = "models",
    fields: Optional[List[str]] = Query(default=None),
    threshold: Optional[float] = Query(default=None, ge=0.0, le=1.0),
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_LIMIT),
    store: ContentStore = Depends(get_store),
) -> FieldSearchResponse:
    searcher = store.field_search_models if collection == "models" else store.field_search_narratives
    results = searcher(q, fields=_clean_keys(fields), threshold=threshold, limit=limit)
    logger.debug("search_fields collection=%s q=%r hits=%d", collection, q, len(results))
    return FieldSearchResponse(query=q, total=len(results), results=_to_field_hits(results))


@router.post("/search/multi", response_model=SearchResponse)
def search_multi(payload: MultiSearchRequest, store: ContentStore = Depends(get_store)) -> SearchResponse:
    if payload.collection == "models":
        records = store.model_records()
        options = store.options(MODEL_SEARCH_KEYS, limit=payload.limit)
    else:
        records = store.narrative_records()
        options = store.options(NARRATIVE_SEARCH_KEYS, limit=payload.limit)
    results = multi_query_search(records, payload.queries, options)
    primary = payload.queries[0] if payload.queries else ""
    return SearchResponse(query=" ".join(payload.queries), total=len(results), results=_to_hits(results, primary))


@router.post("/search/suggestions", response_model=SuggestionResponse)
def suggestions(payload: SuggestionRequest) -> SuggestionResponse:
    return SuggestionResponse(
        suggestions=search_suggestions(payload.query, payload.recent_searches, payload.limit)
    )


@router.post("/highlight", response_model=HighlightResponse)
def highlight(payload: HighlightRequest) -> HighlightResponse:
    return HighlightResponse(segments=_segments(payload.text, payload.query))
