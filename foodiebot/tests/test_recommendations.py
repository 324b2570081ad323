from __future__ import annotations

from foodiebot.recommendations.models import (
    LatLng,
    Place,
    PreferencesPatch,
    PriceRange,
    RecommendationRequest,
    UserPreferences,
)
from foodiebot.recommendations.preferences import (
    learn_from_selection,
    merge_preferences,
    price_range_for_level,
)
from foodiebot.recommendations.retrieval import get_recommendations

USER = {"lat": 25.0330, "lng": 121.5654}


def _place(place_id: str, lat_offset: float = 0.0, **kwargs) -> dict:
    data = {
        "place_id": place_id,
        "name": kwargs.pop("name", place_id),
        "geometry": {"location": {"lat": USER["lat"] + lat_offset, "lng": USER["lng"]}},
    }
    data.update(kwargs)
    return data


# ── Preference learning ──────────────────────────────────────────────────


class TestPreferenceLearning:
    def test_price_range_mapping(self):
        assert price_range_for_level(0) == PriceRange.low
        assert price_range_for_level(1) == PriceRange.low
        assert price_range_for_level(2) == PriceRange.medium
        assert price_range_for_level(3) == PriceRange.high
        assert price_range_for_level(4) == PriceRange.high

    def test_appends_unseen_types_in_order(self):
        prefs = UserPreferences(cuisine_types=["cafe"])
        selected = Place(**_place("x", types=["bakery", "cafe", "food"]))
        learned = learn_from_selection(prefs, selected)
        assert learned.cuisine_types == ["cafe", "bakery", "food"]

    def test_price_level_updates_range(self):
        selected = Place(**_place("x", price_level=3))
        assert learn_from_selection(UserPreferences(), selected).price_range == PriceRange.high

    def test_missing_price_keeps_range(self):
        prefs = UserPreferences(price_range=PriceRange.low)
        selected = Place(**_place("x"))
        assert learn_from_selection(prefs, selected).price_range == PriceRange.low

    def test_does_not_mutate_original(self):
        prefs = UserPreferences()
        learn_from_selection(prefs, Place(**_place("x", types=["thai_restaurant"])))
        assert prefs.cuisine_types == []

    def test_merge_overrides_only_given_fields(self):
        base = UserPreferences(min_rating=3.5, cuisine_types=["cafe"])
        merged = merge_preferences(base, PreferencesPatch(max_distance=2500))
        assert merged.max_distance == 2500
        assert merged.min_rating == 3.5
        assert merged.cuisine_types == ["cafe"]

    def test_merge_without_patch(self):
        base = UserPreferences()
        assert merge_preferences(base, None) is base


# ── Pipeline ─────────────────────────────────────────────────────────────


class TestPipeline:
    def test_returns_at_most_ten(self):
        places = [_place(f"p{i}", lat_offset=i * 0.0005, rating=4.0) for i in range(15)]
        request = RecommendationRequest(places=places, user_location=USER, hour=3)
        response = get_recommendations(request)
        assert len(response.recommendations) == 10
        assert response.total_candidates == 15

    def test_keeps_the_best_scored_places(self):
        places = [_place(f"p{i}", lat_offset=i * 0.0005) for i in range(12)]
        request = RecommendationRequest(places=places, user_location=USER, hour=3)
        ids = [p.place_id for p in get_recommendations(request).recommendations]
        # Farther places score lower on proximity and are cut first
        assert "p10" not in ids and "p11" not in ids

    def test_sorted_by_final_score(self):
        places = [
            _place("plain", rating=4.8, user_ratings_total=300),
            _place("cafe", rating=4.0, types=["cafe"]),
            _place("far", lat_offset=0.05, rating=5.0),
        ]
        request = RecommendationRequest(places=places, user_location=USER, hour=8, weather="rainy")
        ranked = get_recommendations(request).recommendations
        scores = [p.final_score for p in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0].place_id == "cafe"

    def test_preferences_patch_changes_proximity(self):
        places = [_place("near", lat_offset=0.02)]
        request = RecommendationRequest(places=places, user_location=USER, hour=3)
        narrow = get_recommendations(request).recommendations[0].recommendation_score

        request = RecommendationRequest(
            places=places, user_location=USER, hour=3,
            preferences=PreferencesPatch(max_distance=5000),
        )
        wide = get_recommendations(request).recommendations[0].recommendation_score
        assert narrow == 0
        assert wide > 0

    def test_session_preferences_are_used(self):
        places = [_place("near", lat_offset=0.02)]
        request = RecommendationRequest(places=places, user_location=USER, hour=3)
        response = get_recommendations(request, UserPreferences(max_distance=5000))
        assert response.recommendations[0].recommendation_score > 0

    def test_empty_input(self):
        request = RecommendationRequest(places=[], user_location=LatLng(**USER), hour=12)
        response = get_recommendations(request)
        assert response.recommendations == []
        assert response.total_candidates == 0

    def test_hour_defaults_to_clock(self):
        request = RecommendationRequest(places=[_place("a")], user_location=USER)
        response = get_recommendations(request)
        assert 0 <= response.hour <= 23
