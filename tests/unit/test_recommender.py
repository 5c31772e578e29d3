"""Unit tests for search and profile-based recommendation."""

import pytest

from atelier.contexts.discovery import RecommendationProfile, recommend_entries, score_entry
from atelier.contexts.discovery.search import search_entries, searchable_fields


@pytest.fixture
def entries(make_entry):
    return [
        make_entry(
            "modern",
            metadata={
                "tags": ["modern", "professional", "clean"],
                "industries": ["technology", "finance"],
                "roles": ["developer", "analyst"],
            },
        ),
        make_entry(
            "executive",
            metadata={
                "tags": ["executive", "elegant", "director"],
                "industries": ["finance"],
                "roles": ["ceo"],
            },
        ),
        make_entry(
            "technical",
            metadata={
                "tags": ["technical", "senior", "clean"],
                "industries": ["technology"],
                "roles": ["developer"],
            },
        ),
    ]


def _ids(entries):
    return [entry.id for entry in entries]


@pytest.mark.unit
def test_industry_filter(entries):
    result = recommend_entries(entries, RecommendationProfile(industry="technology"))

    assert _ids(result) == ["modern", "technical"]
    assert all("technology" in e.config.metadata.industries for e in result)


@pytest.mark.unit
def test_role_filter(entries):
    assert _ids(recommend_entries(entries, RecommendationProfile(role="ceo"))) == ["executive"]


@pytest.mark.unit
def test_experience_filter_uses_synonyms(entries):
    assert _ids(recommend_entries(entries, RecommendationProfile(experience="senior"))) == ["technical"]
    assert _ids(recommend_entries(entries, RecommendationProfile(experience="executive"))) == ["executive"]
    assert _ids(recommend_entries(entries, RecommendationProfile(experience="mid"))) == ["modern"]
    assert recommend_entries(entries, RecommendationProfile(experience="entry")) == []


@pytest.mark.unit
def test_empty_profile_keeps_everything_in_order(entries):
    assert _ids(recommend_entries(entries, RecommendationProfile())) == [
        "modern",
        "executive",
        "technical",
    ]


@pytest.mark.unit
def test_preferences_rank_without_filtering(entries):
    result = recommend_entries(entries, RecommendationProfile(preferences=["elegant", "director"]))
    assert _ids(result) == ["executive", "modern", "technical"]


@pytest.mark.unit
def test_ties_keep_iteration_order(entries):
    result = recommend_entries(entries, RecommendationProfile(preferences=["clean"]))
    assert _ids(result) == ["modern", "technical", "executive"]


@pytest.mark.unit
def test_scores(entries):
    modern, executive, technical = entries
    profile = RecommendationProfile(industry="technology", role="developer", preferences=["clean", "senior"])

    assert score_entry(modern, profile) == 5
    assert score_entry(technical, profile) == 6
    assert score_entry(executive, profile) == 0


@pytest.mark.unit
def test_mapping_profile(entries):
    result = recommend_entries(entries, {"industry": "finance", "preferences": ["elegant"]})
    assert _ids(result) == ["executive", "modern"]


@pytest.mark.unit
def test_single_preference_string_is_one_tag(entries):
    profile = RecommendationProfile.from_mapping({"preferences": "elegant"})

    assert profile.preferences == ["elegant"]
    assert _ids(recommend_entries(entries, {"preferences": "elegant"})) == [
        "executive",
        "modern",
        "technical",
    ]


@pytest.mark.unit
def test_unknown_experience_rejected():
    with pytest.raises(ValueError, match="Unknown experience level 'intern'"):
        RecommendationProfile(experience="intern")


@pytest.mark.unit
def test_unknown_experience_in_mapping_rejected(entries):
    with pytest.raises(ValueError):
        recommend_entries(entries, {"experience": "guru"})


@pytest.mark.unit
def test_recommend_scenario(registry):
    """Only templates tagged with the requested industry are recommended."""
    assert _ids(registry.recommend({"industry": "technology"})) == ["modern"]


@pytest.mark.unit
def test_search_is_independent_of_profile_fields(entries):
    assert _ids(search_entries(entries, "CEO")) == ["executive"]
    assert _ids(search_entries(entries, "clean")) == ["modern", "technical"]


@pytest.mark.unit
def test_searchable_fields(entries):
    fields = searchable_fields(entries[1])

    assert entries[1].name in fields
    assert "elegant" in fields
    assert "finance" in fields
    assert "ceo" in fields
