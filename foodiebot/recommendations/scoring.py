from __future__ import annotations

import math

from .classifier import classify_place, synthetic_id
from .models import LatLng, Place, ScoredPlace, UserPreferences

EARTH_RADIUS_KM = 6371.0
DEFAULT_MAX_DISTANCE_M = 1000.0

# Point budget per term; a perfect place scores 100.
RATING_WEIGHT = 40
PROXIMITY_WEIGHT = 30
PRICE_WEIGHT = 20
REVIEWS_WEIGHT = 10

REVIEWS_SATURATION = 100


def haversine_distance(a: LatLng, b: LatLng) -> float:
    """Great-circle distance between two coordinates, in meters."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c * 1000


def _rating_term(rating: float | None) -> float:
    if rating is None:
        return 0.0
    return (rating / 5) * RATING_WEIGHT


def _proximity_term(distance: float, max_distance: float) -> float:
    if distance > max_distance:
        return 0.0
    return (1 - distance / max_distance) * PROXIMITY_WEIGHT


def _price_term(price_level: int | None) -> float:
    if price_level is None:
        return 0.0
    # Cheaper is better
    return ((4 - price_level) / 4) * PRICE_WEIGHT


def _reviews_term(user_ratings_total: int | None) -> float:
    if user_ratings_total is None:
        return 0.0
    return min(user_ratings_total / REVIEWS_SATURATION, 1) * REVIEWS_WEIGHT


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_components(
    place: Place,
    user_location: LatLng,
    preferences: UserPreferences,
) -> dict[str, float]:
    """Return the distance and each weighted term, unrounded."""
    distance = haversine_distance(user_location, place.location)
    max_distance = preferences.max_distance if preferences.max_distance > 0 else DEFAULT_MAX_DISTANCE_M
    return {
        "distance": distance,
        "rating": _rating_term(place.rating),
        "proximity": _proximity_term(distance, max_distance),
        "price": _price_term(place.price_level),
        "reviews": _reviews_term(place.user_ratings_total),
    }


def _total(parts: dict[str, float]) -> int:
    return _round_half_up(parts["rating"] + parts["proximity"] + parts["price"] + parts["reviews"])


def calculate_recommendation_score(
    place: Place,
    user_location: LatLng,
    preferences: UserPreferences,
) -> int:
    return _total(score_components(place, user_location, preferences))


def score_place(
    place: Place,
    index: int,
    user_location: LatLng,
    preferences: UserPreferences,
) -> ScoredPlace:
    parts = score_components(place, user_location, preferences)
    restaurant_type = classify_place(place)
    data = place.model_dump()
    data.update(
        original_place_id=place.place_id,
        recommendation_score=_total(parts),
        distance=parts["distance"],
        restaurant_type=restaurant_type,
        custom_id=synthetic_id(restaurant_type, index),
    )
    return ScoredPlace(**data)


def score_places(
    places: list[Place],
    user_location: LatLng,
    preferences: UserPreferences,
) -> list[ScoredPlace]:
    """Score a batch; ``custom_id`` indices are positions within this batch."""
    return [
        score_place(place, index, user_location, preferences)
        for index, place in enumerate(places)
    ]
