from __future__ import annotations

import logging
from typing import NamedTuple

from .models import Place, RestaurantType

logger = logging.getLogger(__name__)


class CuisineRule(NamedTuple):
    category: RestaurantType
    type_tokens: tuple[str, ...]
    name_keywords: tuple[str, ...]


# Evaluated top to bottom, first match wins. Within a rule the provider
# ``types`` are checked before the name keywords. Keyword lists overlap on
# purpose ("curry", "bistro", "cafe"); earlier rules shadow later ones.
CUISINE_RULES: tuple[CuisineRule, ...] = (
    CuisineRule(
        RestaurantType.japanese,
        ("japanese", "sushi", "ramen"),
        (
            "sushi", "japanese", "ramen", "sakura", "tokyo", "zen", "sashimi",
            "tempura", "teriyaki", "wasabi", "miso", "udon",
        ),
    ),
    CuisineRule(
        RestaurantType.italian,
        ("italian", "pizza"),
        (
            "italian", "pizza", "pasta", "bella", "roma", "napoli", "spaghetti",
            "lasagna", "risotto", "carbonara", "alfredo", "marinara",
        ),
    ),
    CuisineRule(
        RestaurantType.chinese,
        ("chinese",),
        (
            "chinese", "dragon", "wok", "golden", "peking", "shanghai", "kung pao",
            "sweet and sour", "lo mein", "chow mein", "dim sum", "beijing",
            "canton", "mandarin",
        ),
    ),
    CuisineRule(
        RestaurantType.mexican,
        ("mexican",),
        ("mexican", "taco", "burrito", "el ", "mariachi", "cantina"),
    ),
    CuisineRule(
        RestaurantType.thai,
        ("thai",),
        ("thai", "bangkok", "pad thai", "curry", "spicy"),
    ),
    CuisineRule(
        RestaurantType.indian,
        ("indian",),
        ("indian", "curry", "tandoor", "spice", "masala"),
    ),
    CuisineRule(
        RestaurantType.korean,
        ("korean",),
        ("korean", "bbq", "kimchi", "seoul"),
    ),
    CuisineRule(
        RestaurantType.french,
        ("french",),
        ("french", "bistro", "cafe", "paris", "brasserie"),
    ),
    CuisineRule(
        RestaurantType.seafood,
        ("seafood",),
        ("seafood", "fish", "oyster", "lobster", "crab"),
    ),
    CuisineRule(
        RestaurantType.cafe,
        ("cafe", "coffee"),
        ("cafe", "coffee", "espresso", "latte", "brew"),
    ),
    CuisineRule(
        RestaurantType.fast_food,
        ("fast_food", "meal_takeaway"),
        ("mcdonalds", "burger", "kfc", "subway", "pizza hut"),
    ),
    CuisineRule(
        RestaurantType.american,
        ("american", "steakhouse", "restaurant"),
        ("american", "steak", "grill", "bistro", "diner"),
    ),
)

DEFAULT_RESTAURANT_TYPE = RestaurantType.american


def _types_match(types: list[str], tokens: tuple[str, ...]) -> bool:
    return any(token in t for t in types for token in tokens)


def _name_match(name: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in name for keyword in keywords)


def classify(types: list[str], name: str) -> RestaurantType:
    """Map provider tags and a display name to one cuisine category."""
    types_lower = [t.lower() for t in types]
    name_lower = (name or "").lower()

    for rule in CUISINE_RULES:
        if _types_match(types_lower, rule.type_tokens):
            return rule.category
        if _name_match(name_lower, rule.name_keywords):
            return rule.category

    logger.debug("No cuisine match for %r (types=%s), defaulting to %s",
                 name, types, DEFAULT_RESTAURANT_TYPE.value)
    return DEFAULT_RESTAURANT_TYPE


def classify_place(place: Place) -> RestaurantType:
    return classify(place.types, place.name)


def synthetic_id(category: RestaurantType | str, index: int) -> str:
    """Display label for the ``index``-th place of a scored batch."""
    try:
        value = RestaurantType(category).value
    except ValueError:
        value = DEFAULT_RESTAURANT_TYPE.value
    return f"{value}_restaurant_1_{index}"
