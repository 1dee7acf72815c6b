"""Related-content recommendations for catalog detail views."""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .models import ContentType, MentalModel, Narrative

MIN_SCORE = 0.1
_WORD_RE = re.compile(r"\W+")


@dataclass
class RelatedItem:
    id: str
    type: ContentType
    title: str
    score: float
    reason: str


def jaccard(first: Iterable[str], second: Iterable[str]) -> float:
    """Case-insensitive Jaccard index of two string collections."""

    set_a = {value.lower() for value in first}
    set_b = {value.lower() for value in second}
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def text_overlap(first: str, second: str) -> float:
    return jaccard(_words(first), _words(second))


def _words(text: str) -> List[str]:
    return [word for word in _WORD_RE.split(text.lower()) if word]


def _ranked(related: List[RelatedItem], limit: int) -> List[RelatedItem]:
    related.sort(key=lambda item: -item.score)
    return related[:limit]


def find_related_models(
    current: MentalModel,
    models: Sequence[MentalModel],
    limit: int = 5,
) -> List[RelatedItem]:
    related: List[RelatedItem] = []
    for model in models:
        if model.code == current.code:
            continue

        score = 0.0
        reasons: List[str] = []
        if current.primary_transformation and model.primary_transformation == current.primary_transformation:
            score += 0.5
            reasons.append("same transformation")

        tag_score = jaccard(current.tags, model.tags)
        if tag_score > 0:
            score += tag_score * 0.3
            reasons.append("similar tags")

        if score < MIN_SCORE / 2:
            continue

        if current.description and model.description:
            description_score = text_overlap(current.description, model.description)
            if description_score > 0.05:
                score += description_score * 0.2
                reasons.append("similar description")

        if model.difficulty == current.difficulty:
            score += 0.05

        if score > MIN_SCORE:
            related.append(
                RelatedItem(
                    id=model.code,
                    type="mental-model",
                    title=model.name,
                    score=score,
                    reason=", ".join(reasons) or "related content",
                )
            )
    return _ranked(related, limit)


def find_related_narratives(
    current: Narrative,
    narratives: Sequence[Narrative],
    limit: int = 5,
) -> List[RelatedItem]:
    related: List[RelatedItem] = []
    for narrative in narratives:
        if narrative.narrative_id == current.narrative_id:
            continue

        score = 0.0
        reasons: List[str] = []
        if current.category and narrative.category == current.category:
            score += 0.4
            reasons.append("same category")

        tag_score = jaccard(current.tags, narrative.tags)
        if tag_score > 0:
            score += tag_score * 0.3
            reasons.append("similar tags")

        domain_score = jaccard(current.domain, narrative.domain)
        if domain_score > 0:
            score += domain_score * 0.2
            reasons.append("shared domain")

        if score < MIN_SCORE / 2:
            continue

        summary_score = text_overlap(current.summary, narrative.summary)
        if summary_score > 0.05:
            score += summary_score * 0.1
            reasons.append("similar content")

        if narrative.evidence_quality == current.evidence_quality:
            score += 0.05

        if score > MIN_SCORE:
            related.append(
                RelatedItem(
                    id=narrative.narrative_id,
                    type="narrative",
                    title=narrative.title,
                    score=score,
                    reason=", ".join(reasons) or "related content",
                )
            )
    return _ranked(related, limit)


@dataclass
class RelatedCandidate:
    """The slice of a model or narrative that cross-type scoring looks at."""

    id: str
    type: ContentType
    title: str
    category: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class ViewedItem:
    type: ContentType
    item_id: str
    tags: List[str] = field(default_factory=list)
    category: str = ""


def model_candidate(model: MentalModel) -> RelatedCandidate:
    return RelatedCandidate(
        id=model.code, type="mental-model", title=model.name, category=model.category, tags=list(model.tags)
    )


def narrative_candidate(narrative: Narrative) -> RelatedCandidate:
    return RelatedCandidate(
        id=narrative.narrative_id,
        type="narrative",
        title=narrative.title,
        category=narrative.category,
        tags=list(narrative.tags),
    )


def find_cross_type_related(
    current: RelatedCandidate,
    others: Sequence[RelatedCandidate],
    limit: int = 3,
) -> List[RelatedItem]:
    """Suggest narratives for a model, or models for a narrative."""

    related: List[RelatedItem] = []
    for item in others:
        score = 0.0
        reasons: List[str] = []
        if item.category and item.category == current.category:
            score += 0.4
            reasons.append("related category")

        tag_score = jaccard(current.tags, item.tags)
        if tag_score > 0:
            score += tag_score * 0.4
            reasons.append("related topics")

        title_score = text_overlap(current.title, item.title)
        if title_score > 0.1:
            score += title_score * 0.2

        if score > MIN_SCORE:
            related.append(
                RelatedItem(
                    id=item.id,
                    type=item.type,
                    title=item.title,
                    score=score,
                    reason=", ".join(reasons) or "related content",
                )
            )
    return _ranked(related, limit)


def get_history_based_recommendations(
    viewed: Sequence[ViewedItem],
    narratives: Sequence[Narrative],
    models: Sequence[MentalModel],
    limit: int = 5,
) -> List[RelatedItem]:
    """Recommend unseen items sharing the most viewed categories and tags.

    The five most frequent tags and three most frequent categories of the
    history count; a category hit adds 0.5 and each matching tag 0.2. A model
    hits a category by its category name or primary transformation.
    """

    viewed_ids = {item.item_id for item in viewed}
    top_tags = {tag for tag, _ in Counter(tag for item in viewed for tag in item.tags).most_common(5)}
    top_categories = {
        category for category, _ in Counter(item.category for item in viewed if item.category).most_common(3)
    }

    recommendations: List[RelatedItem] = []
    for narrative in narratives:
        if narrative.narrative_id in viewed_ids:
            continue
        score = 0.5 if narrative.category in top_categories else 0.0
        score += 0.2 * sum(1 for tag in narrative.tags if tag in top_tags)
        if score > 0:
            recommendations.append(
                RelatedItem(
                    id=narrative.narrative_id,
                    type="narrative",
                    title=narrative.title,
                    score=score,
                    reason="based on your history",
                )
            )

    for model in models:
        if model.code in viewed_ids:
            continue
        in_category = model.category in top_categories or model.primary_transformation in top_categories
        score = 0.5 if in_category else 0.0
        score += 0.2 * sum(1 for tag in model.tags if tag in top_tags)
        if score > 0:
            recommendations.append(
                RelatedItem(
                    id=model.code,
                    type="mental-model",
                    title=model.name,
                    score=score,
                    reason="based on your history",
                )
            )
    return _ranked(recommendations, limit)


def get_you_might_also_like(
    current: RelatedCandidate,
    bookmarked: Sequence[str],
    recently_viewed: Sequence[str],
    candidates: Sequence[RelatedCandidate],
    limit: int = 4,
) -> List[RelatedItem]:
    # Only the three most recent views are hidden.
    excluded = {current.id, *bookmarked, *recently_viewed[:3]}

    recommendations: List[RelatedItem] = []
    for item in candidates:
        if item.id in excluded:
            continue
        score = 0.0
        reasons: List[str] = []
        if item.category and item.category == current.category:
            score += 0.3
            reasons.append("same category")

        tag_score = jaccard(current.tags, item.tags)
        if tag_score > 0:
            score += tag_score * 0.5
            reasons.append("similar topics")

        if item.type != current.type:
            score += 0.1
            reasons.append("discover new type")

        if score > MIN_SCORE:
            recommendations.append(
                RelatedItem(id=item.id, type=item.type, title=item.title, score=score, reason=", ".join(reasons))
            )
    return _ranked(recommendations, limit)
