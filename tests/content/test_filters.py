from catalog.content.filters import (
    ModelFilters,
    NarrativeFilters,
    apply_model_filters,
    apply_narrative_filters,
    model_relevance,
)


def _codes(result):
    return [model.code for model in result.items]


def _ids(result):
    return [narrative.narrative_id for narrative in result.items]


def test_default_model_listing_sorted_by_name(store):
    result = apply_model_filters(store, ModelFilters())
    assert [m.name for m in result.items] == [
        "Composition",
        "Contrarian Thinking",
        "Feedback Loops",
        "First Principles Thinking",
        "Inversion",
        "Premortem Analysis",
    ]
    assert result.result_count == result.total_count == 6


def test_category_filter(store):
    result = apply_model_filters(store, ModelFilters(category="Inversion"))
    assert _codes(result) == ["IN1", "IN2"]
    assert result.total_count == 6


def test_transformation_filter_with_descending_names(store):
    result = apply_model_filters(store, ModelFilters(transformation="P", sort_by="name-desc"))
    assert _codes(result) == ["P1", "P2"]


def test_difficulty_sorting_treats_missing_as_zero(store):
    ascending = apply_model_filters(store, ModelFilters(sort_by="difficulty-asc"))
    assert _codes(ascending) == ["CO1", "P2", "IN1", "IN2", "P1", "SY1"]
    descending = apply_model_filters(store, ModelFilters(sort_by="difficulty-desc"))
    assert _codes(descending)[0] == "SY1"
    assert _codes(descending)[-1] == "CO1"


def test_single_character_search_is_ignored(store):
    result = apply_model_filters(store, ModelFilters(search_term="i"))
    assert result.result_count == 6


def test_search_with_relevance_order(store):
    result = apply_model_filters(store, ModelFilters(search_term="co", sort_by="relevance"))
    assert _codes(result) == ["CO1", "P2", "IN1"]
    assert result.result_count < result.total_count


def test_search_keeps_only_literal_matches(store):
    result = apply_model_filters(store, ModelFilters(search_term="risk", sort_by="relevance"))
    assert _codes(result) == ["IN2"]


def test_search_combined_with_category(store):
    result = apply_model_filters(store, ModelFilters(search_term="thinking", category="Perspective"))
    assert _codes(result) == ["P2", "P1"]
    assert _codes(apply_model_filters(store, ModelFilters(search_term="inversion", category="Inversion"))) == ["IN1"]


def test_model_relevance_weights(store):
    assert model_relevance(store.get_model("CO1"), "composition") == 1000
    assert model_relevance(store.get_model("IN2"), "premortem") == 500
    assert model_relevance(store.get_model("P1"), "principles") == 300
    assert model_relevance(store.get_model("IN1"), "in1") == 400
    assert model_relevance(store.get_model("IN1"), "obstacles") == 50
    assert model_relevance(store.get_model("IN2"), "risk") == 75
    assert model_relevance(store.get_model("IN2"), "risk planning") == 200
    assert model_relevance(store.get_model("SY1"), "risk") == 0


def test_model_relevance_escapes_regex_characters(store):
    assert model_relevance(store.get_model("P1"), "(first") == 0


def test_narratives_sorted_by_title(store):
    result = apply_narrative_filters(store, NarrativeFilters())
    assert _ids(result) == ["NAR-002", "NAR-001", "NAR-003"]


def test_narratives_sorted_by_confidence_desc(store):
    result = apply_narrative_filters(store, NarrativeFilters(sort_by="confidence", sort_order="desc"))
    assert _ids(result) == ["NAR-002", "NAR-001", "NAR-003"]
    ascending = apply_narrative_filters(store, NarrativeFilters(sort_by="confidence"))
    assert _ids(ascending) == ["NAR-003", "NAR-001", "NAR-002"]


def test_narratives_sorted_by_evidence_quality(store):
    result = apply_narrative_filters(store, NarrativeFilters(sort_by="evidence_quality"))
    assert _ids(result)[-1] == "NAR-003"


def test_narrative_facet_filters(store):
    assert _ids(apply_narrative_filters(store, NarrativeFilters(evidence_quality=["B"]))) == ["NAR-003"]
    assert _ids(apply_narrative_filters(store, NarrativeFilters(categories=["Psychology"]))) == ["NAR-002"]
    by_domain = apply_narrative_filters(store, NarrativeFilters(domains=["business"], sort_by="confidence"))
    assert _ids(by_domain) == ["NAR-003", "NAR-001"]
    assert by_domain.total_count == 3


def test_narrative_search(store):
    result = apply_narrative_filters(store, NarrativeFilters(search_term="biases", sort_by="relevance"))
    assert _ids(result)[0] == "NAR-002"
