"""Catalog content loading, filtering and recommendations."""

from .filters import FilterResult, ModelFilters, NarrativeFilters, apply_model_filters, apply_narrative_filters
from .models import CatalogDocument, MentalModel, Narrative
from .related import (
    RelatedCandidate,
    RelatedItem,
    ViewedItem,
    find_cross_type_related,
    find_related_models,
    find_related_narratives,
    get_history_based_recommendations,
    get_you_might_also_like,
)
from .store import ContentStore

__all__ = [
    "CatalogDocument",
    "ContentStore",
    "FilterResult",
    "MentalModel",
    "ModelFilters",
    "Narrative",
    "NarrativeFilters",
    "RelatedCandidate",
    "RelatedItem",
    "ViewedItem",
    "apply_model_filters",
    "apply_narrative_filters",
    "find_cross_type_related",
    "find_related_models",
    "find_related_narratives",
    "get_history_based_recommendations",
    "get_you_might_also_like",
]
