"""Facet filters and sort orders for catalog listings."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Generic, List, Literal, Optional, Sequence, Tuple, TypeVar

from .models import MentalModel, Narrative
from .store import ContentStore

T = TypeVar("T")

MIN_SEARCH_LENGTH = 2

ModelSort = Literal["name-asc", "name-desc", "difficulty-asc", "difficulty-desc", "relevance"]
NarrativeSort = Literal["title", "confidence", "evidence_quality", "relevance"]
SortOrder = Literal["asc", "desc"]


@dataclass
class ModelFilters:
    search_term: str = ""
    category: Optional[str] = None
    transformation: Optional[str] = None
    sort_by: ModelSort = "name-asc"


@dataclass
class NarrativeFilters:
    search_term: str = ""
    categories: List[str] = field(default_factory=list)
    evidence_quality: List[str] = field(default_factory=list)
    domains: List[str] = field(default_factory=list)
    sort_by: NarrativeSort = "title"
    sort_order: SortOrder = "asc"


@dataclass
class FilterResult(Generic[T]):
    items: List[T]
    result_count: int
    total_count: int


def _searching(term: str) -> bool:
    return len(term.strip()) >= MIN_SEARCH_LENGTH


def model_relevance(model: MentalModel, term: str, boundary: Optional[re.Pattern[str]] = None) -> int:
    """Score how well *model* answers a list search; 0 means it is filtered out.

    Name matches dominate (exact 1000, prefix 500, word start 300, anywhere 100),
    then the code (exact 400, partial 50). A multi-word term earns 200 when every
    word appears in the name, description or tags. Description (+50) and tag
    (+75) hits only count while the score is still below 100.
    """

    query = term.strip().lower()
    if not query:
        return 0
    if boundary is None:
        boundary = re.compile(r"\b" + re.escape(query))
    name = model.name.lower()
    code = model.code.lower()
    description = model.description.lower()
    tags = [tag.lower() for tag in model.tags]

    score = 0
    if name == query:
        score += 1000
    elif name.startswith(query):
        score += 500
    elif boundary.search(name):
        score += 300
    elif query in name:
        score += 100

    if code == query:
        score += 400
    elif query in code:
        score += 50

    words = query.split()
    if len(words) > 1 and all(
        word in name or word in description or any(word in tag for tag in tags) for word in words
    ):
        score += 200

    if score < 100 and query in description:
        score += 50
    if score < 100 and any(query in tag for tag in tags):
        score += 75
    return score


def rank_models(models: Sequence[MentalModel], term: str) -> List[Tuple[MentalModel, int]]:
    """Keep models with a positive relevance, best first; ties keep catalog order."""

    boundary = re.compile(r"\b" + re.escape(term.strip().lower()))
    scored = [(model, model_relevance(model, term, boundary)) for model in models]
    ranked = [pair for pair in scored if pair[1] > 0]
    ranked.sort(key=lambda pair: -pair[1])
    return ranked


def apply_model_filters(store: ContentStore, filters: ModelFilters) -> FilterResult[MentalModel]:
    models: Sequence[MentalModel] = store.models()
    if _searching(filters.search_term):
        models = [model for model, _ in rank_models(models, filters.search_term)]

    selected = list(models)
    if filters.category:
        selected = [model for model in selected if model.category == filters.category]
    if filters.transformation:
        selected = [model for model in selected if filters.transformation in model.transformations]

    if filters.sort_by == "name-asc":
        selected.sort(key=lambda model: model.name.lower())
    elif filters.sort_by == "name-desc":
        selected.sort(key=lambda model: model.name.lower(), reverse=True)
    elif filters.sort_by == "difficulty-asc":
        selected.sort(key=lambda model: model.difficulty)
    elif filters.sort_by == "difficulty-desc":
        selected.sort(key=lambda model: model.difficulty, reverse=True)

    return FilterResult(items=selected, result_count=len(selected), total_count=len(store.models()))


def apply_narrative_filters(store: ContentStore, filters: NarrativeFilters) -> FilterResult[Narrative]:
    narratives: Sequence[Narrative] = store.narratives()
    if _searching(filters.search_term):
        results = store.search_narratives(filters.search_term, limit=len(narratives) or 1)
        narratives = [store.narrative_for_record(result.item) for result in results]

    selected = list(narratives)
    if filters.categories:
        wanted = set(filters.categories)
        selected = [n for n in selected if n.category in wanted]
    if filters.evidence_quality:
        grades = set(filters.evidence_quality)
        selected = [n for n in selected if n.evidence_quality in grades]
    if filters.domains:
        domains = {domain.lower() for domain in filters.domains}
        selected = [n for n in selected if domains.intersection(d.lower() for d in n.domain)]

    reverse = filters.sort_order == "desc"
    if filters.sort_by == "title":
        selected.sort(key=lambda n: n.title.lower(), reverse=reverse)
    elif filters.sort_by == "confidence":
        selected.sort(key=lambda n: n.confidence, reverse=reverse)
    elif filters.sort_by == "evidence_quality":
        # "A" is the strongest grade, so ascending order lists it first.
        selected.sort(key=lambda n: n.evidence_quality, reverse=reverse)

    return FilterResult(items=selected, result_count=len(selected), total_count=len(store.narratives()))
