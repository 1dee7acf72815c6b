"""Browse, detail and related-content endpoints."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..config import Settings
from ..content.filters import (
    ModelFilters,
    ModelSort,
    NarrativeFilters,
    NarrativeSort,
    apply_model_filters,
    apply_narrative_filters,
)
from ..content.models import ContentType, MentalModel, Narrative
from ..content.related import (
    RelatedCandidate,
    RelatedItem,
    ViewedItem,
    find_cross_type_related,
    find_related_models,
    find_related_narratives,
    get_history_based_recommendations,
    get_you_might_also_like,
    model_candidate,
    narrative_candidate,
)
from ..content.store import ContentStore
from .deps import get_settings, get_store

router = APIRouter(prefix="/api")

CROSS_TYPE_LIMIT = 3


class ModelListResponse(BaseModel):
    items: List[MentalModel]
    result_count: int
    total_count: int
    categories: List[str]
    transformations: Dict[str, str]


class NarrativeListResponse(BaseModel):
    items: List[Narrative]
    result_count: int
    total_count: int
    categories: List[str]
    domains: List[str]


class RelatedPayload(BaseModel):
    id: str
    type: str
    title: str
    score: float
    reason: str


class RelatedResponse(BaseModel):
    source: str
    items: List[RelatedPayload]


class ViewedPayload(BaseModel):
    type: ContentType
    item_id: str
    tags: List[str] = Field(default_factory=list)
    category: str = ""


class HistoryRequest(BaseModel):
    viewed: List[ViewedPayload] = Field(default_factory=list)
    limit: int = Field(default=5, ge=1, le=50)


class AlsoLikeRequest(BaseModel):
    id: str
    type: ContentType
    bookmarked: List[str] = Field(default_factory=list)
    recently_viewed: List[str] = Field(default_factory=list)
    limit: int = Field(default=4, ge=1, le=50)


def _related_payload(source: str, items: List[RelatedItem]) -> RelatedResponse:
    return RelatedResponse(
        source=source,
        items=[
            RelatedPayload(id=i.id, type=i.type, title=i.title, score=round(i.score, 4), reason=i.reason)
            for i in items
        ],
    )


def _transformation_facets(store: ContentStore) -> Dict[str, str]:
    labels = store.transformation_labels
    return {key: labels.get(key, key) for key in store.transformations()}


@router.get("/models", response_model=ModelListResponse)
def list_models(
    search: str = "",
    category: Optional[str] = None,
    transformation: Optional[str] = None,
    sort_by: ModelSort = "name-asc",
    store: ContentStore = Depends(get_store),
) -> ModelListResponse:
    filters = ModelFilters(search_term=search, category=category, transformation=transformation, sort_by=sort_by)
    result = apply_model_filters(store, filters)
    return ModelListResponse(
        items=result.items,
        result_count=result.result_count,
        total_count=result.total_count,
        categories=store.categories(),
        transformations=_transformation_facets(store),
    )


@router.get("/models/{code}", response_model=MentalModel)
def get_model(code: str, store: ContentStore = Depends(get_store)) -> MentalModel:
    return store.get_model(code)


@router.get("/models/{code}/related", response_model=RelatedResponse)
def related_models(
    code: str,
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RelatedResponse:
    current = store.get_model(code)
    items = find_related_models(current, store.models(), limit or settings.related_limit)
    return _related_payload(current.code, items)


@router.get("/narratives", response_model=NarrativeListResponse)
def list_narratives(
    search: str = "",
    category: Optional[List[str]] = Query(default=None),
    evidence_quality: Optional[List[Literal["A", "B", "C"]]] = Query(default=None),
    domain: Optional[List[str]] = Query(default=None),
    sort_by: NarrativeSort = "title",
    sort_order: Literal["asc", "desc"] = "asc",
    store: ContentStore = Depends(get_store),
) -> NarrativeListResponse:
    filters = NarrativeFilters(
        search_term=search,
        categories=category or [],
        evidence_quality=list(evidence_quality or []),
        domains=domain or [],
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = apply_narrative_filters(store, filters)
    return NarrativeListResponse(
        items=result.items,
        result_count=result.result_count,
        total_count=result.total_count,
        categories=store.narrative_categories(),
        domains=store.domains(),
    )


@router.get("/narratives/{narrative_id}", response_model=Narrative)
def get_narrative(narrative_id: str, store: ContentStore = Depends(get_store)) -> Narrative:
    return store.get_narrative(narrative_id)


@router.get("/narratives/{narrative_id}/related", response_model=RelatedResponse)
def related_narratives(
    narrative_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RelatedResponse:
    current = store.get_narrative(narrative_id)
    items = find_related_narratives(current, store.narratives(), limit or settings.related_limit)
    return _related_payload(current.narrative_id, items)



def _candidates(store: ContentStore) -> List[RelatedCandidate]:
    return [model_candidate(m) for m in store.models()] + [narrative_candidate(n) for n in store.narratives()]


@router.get("/models/{code}/related-narratives", response_model=RelatedResponse)
def model_related_narratives(
    code: str,
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    store: ContentStore = Depends(get_store),
) -> RelatedResponse:
    current = store.get_model(code)
    others = [narrative_candidate(n) for n in store.narratives()]
    items = find_cross_type_related(model_candidate(current), others, limit or CROSS_TYPE_LIMIT)
    return _related_payload(current.code, items)


@router.get("/narratives/{narrative_id}/related-models", response_model=RelatedResponse)
def narrative_related_models(
    narrative_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    store: ContentStore = Depends(get_store),
) -> RelatedResponse:
    current = store.get_narrative(narrative_id)
    others = [model_candidate(m) for m in store.models()]
    items = find_cross_type_related(narrative_candidate(current), others, limit or CROSS_TYPE_LIMIT)
    return _related_payload(current.narrative_id, items)


@router.post("/recommendations/history", response_model=RelatedResponse)
def history_recommendations(payload: HistoryRequest, store: ContentStore = Depends(get_store)) -> RelatedResponse:
    viewed = [
        ViewedItem(type=v.type, item_id=v.item_id, tags=list(v.tags), category=v.category)
        for v in payload.viewed
    ]
    items = get_history_based_recommendations(viewed, store.narratives(), store.models(), payload.limit)
    return _related_payload("history", items)


@router.post("/recommendations/also-like", response_model=RelatedResponse)
def also_like(payload: AlsoLikeRequest, store: ContentStore = Depends(get_store)) -> RelatedResponse:
    if payload.type == "mental-model":
        current = model_candidate(store.get_model(payload.id))
    else:
        current = narrative_candidate(store.get_narrative(payload.id))
    items = get_you_might_also_like(
        current, payload.bookmarked, payload.recently_viewed, _candidates(store), payload.limit
    )
    return _related_payload(current.id, items)
