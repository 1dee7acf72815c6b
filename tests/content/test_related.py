import pytest

from catalog.content.related import (
    RelatedCandidate,
    ViewedItem,
    find_cross_type_related,
    find_related_models,
    find_related_narratives,
    get_history_based_recommendations,
    get_you_might_also_like,
    jaccard,
    model_candidate,
    narrative_candidate,
    text_overlap,
)


def test_jaccard_is_case_insensitive():
    assert jaccard(["Risk", "planning"], ["risk", "design"]) == pytest.approx(1 / 3)
    assert jaccard([], ["a"]) == 0.0


def test_text_overlap_ignores_punctuation():
    assert text_overlap("Think, backwards!", "think backwards") == 1.0


def test_related_models_prefer_same_transformation(store):
    current = store.get_model("IN1")
    related = find_related_models(current, store.models())
    ids = [item.id for item in related]
    assert ids[0] == "IN2"
    assert "IN1" not in ids
    assert "P2" not in ids
    assert related[0].type == "mental-model"
    assert related[0].reason.startswith("same transformation, similar tags")
    assert [item.score for item in related] == sorted((item.score for item in related), reverse=True)


def test_related_models_respects_limit(store):
    current = store.get_model("IN1")
    assert len(find_related_models(current, store.models(), limit=1)) == 1


def test_related_narratives(store):
    current = store.get_narrative("NAR-001")
    related = find_related_narratives(current, store.narratives())
    assert [item.id for item in related] == ["NAR-002"]
    assert related[0].type == "narrative"
    assert related[0].score == pytest.approx(1 / 7 * 0.3 + 1 / 4 * 0.2 + 0.05)
    assert related[0].reason == "similar tags, shared domain"


def test_related_narratives_excludes_current(store):
    current = store.get_narrative("NAR-003")
    assert all(item.id != "NAR-003" for item in find_related_narratives(current, store.narratives()))


def _narrative_candidates(store):
    return [narrative_candidate(n) for n in store.narratives()]


def _all_candidates(store):
    return [model_candidate(m) for m in store.models()] + _narrative_candidates(store)


def test_cross_type_related_narratives_for_model(store):
    current = model_candidate(store.get_model("IN2"))
    related = find_cross_type_related(current, _narrative_candidates(store))
    assert [item.id for item in related] == ["NAR-003"]
    assert related[0].score == pytest.approx(0.5 * 0.4)
    assert related[0].reason == "related topics"
    assert related[0].type == "narrative"


def test_cross_type_related_models_for_narrative(store):
    current = narrative_candidate(store.get_narrative("NAR-003"))
    others = [model_candidate(m) for m in store.models()]
    assert [item.id for item in find_cross_type_related(current, others)] == ["IN2"]


def test_cross_type_category_match(store):
    current = RelatedCandidate(
        id="X1", type="mental-model", title="Risk Thinking", category="Psychology", tags=["biases"]
    )
    related = find_cross_type_related(current, _narrative_candidates(store))
    assert [item.id for item in related] == ["NAR-002"]
    assert related[0].score == pytest.approx(0.4 + 0.25 * 0.4)
    assert related[0].reason == "related category, related topics"


def test_history_recommendations(store):
    viewed = [
        ViewedItem(type="mental-model", item_id="IN1", tags=["problem-solving", "planning"], category="Inversion")
    ]
    related = get_history_based_recommendations(viewed, store.narratives(), store.models())
    assert [item.id for item in related] == ["IN2", "NAR-003", "P1"]
    assert [item.score for item in related] == pytest.approx([0.7, 0.2, 0.2])
    assert {item.reason for item in related} == {"based on your history"}
    assert len(get_history_based_recommendations(viewed, store.narratives(), store.models(), limit=2)) == 2


def test_history_recommendations_without_history(store):
    assert get_history_based_recommendations([], store.narratives(), store.models()) == []


def test_you_might_also_like(store):
    current = model_candidate(store.get_model("IN1"))
    related = get_you_might_also_like(current, [], [], _all_candidates(store))
    assert [item.id for item in related] == ["IN2", "NAR-003", "P1"]
    assert related[0].reason == "same category, similar topics"
    assert related[1].reason == "similar topics, discover new type"
    assert related[1].score == pytest.approx(0.2 * 0.5 + 0.1)


def test_you_might_also_like_skips_bookmarked_and_recent(store):
    current = model_candidate(store.get_model("IN1"))
    related = get_you_might_also_like(current, ["IN2"], ["P1"], _all_candidates(store))
    assert [item.id for item in related] == ["NAR-003"]
