from __future__ import annotations

from .models import Place, PreferencesPatch, PriceRange, UserPreferences


def price_range_for_level(price_level: int) -> PriceRange:
    if price_level <= 1:
        return PriceRange.low
    if price_level <= 2:
        return PriceRange.medium
    return PriceRange.high


def learn_from_selection(preferences: UserPreferences, selected: Place) -> UserPreferences:
    """Return new preferences grown from a place the user picked.

    Unseen type tags are appended in order; the price range follows the
    selected place's price level when it has one.
    """
    cuisine_types = list(preferences.cuisine_types)
    for t in selected.types:
        if t not in cuisine_types:
            cuisine_types.append(t)

    price_range = preferences.price_range
    if selected.price_level is not None:
        price_range = price_range_for_level(selected.price_level)

    return preferences.model_copy(
        update={"cuisine_types": cuisine_types, "price_range": price_range}
    )


def merge_preferences(base: UserPreferences, patch: PreferencesPatch | None) -> UserPreferences:
    if patch is None:
        return base
    return base.model_copy(update=patch.model_dump(exclude_none=True))
