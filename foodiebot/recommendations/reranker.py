from __future__ import annotations

from datetime import datetime
from typing import NamedTuple

from .models import RerankedPlace, ScoredPlace


class HourBonus(NamedTuple):
    start: int
    end: int
    types: tuple[str, ...]
    bonus: int


# Half-open [start, end) local hour buckets; at most one applies.
HOUR_BONUSES: tuple[HourBonus, ...] = (
    HourBonus(6, 11, ("cafe",), 20),  # breakfast
    HourBonus(11, 14, ("restaurant",), 20),  # lunch
    HourBonus(14, 17, ("cafe", "bakery"), 20),  # afternoon tea
    HourBonus(17, 21, ("restaurant",), 20),  # dinner
)

RAINY_CAFE_BONUS = 10


def current_hour() -> int:
    return datetime.now().hour


def context_score(types: list[str], hour: int, weather: str = "sunny") -> int:
    score = 0
    for bucket in HOUR_BONUSES:
        if bucket.start <= hour < bucket.end:
            if any(t in types for t in bucket.types):
                score += bucket.bonus
            break

    if weather == "rainy" and "cafe" in types:
        score += RAINY_CAFE_BONUS

    return score


def rerank(
    places: list[ScoredPlace],
    hour: int,
    weather: str = "sunny",
) -> list[RerankedPlace]:
    """Add time/weather bonuses and re-sort by final score.

    ``sorted`` is stable, so ties keep their incoming order.
    """
    reranked: list[RerankedPlace] = []
    for place in places:
        bonus = context_score(place.types, hour, weather)
        data = place.model_dump()
        data.update(
            context_score=bonus,
            final_score=place.recommendation_score + bonus,
        )
        reranked.append(RerankedPlace(**data))

    return sorted(reranked, key=lambda p: p.final_score, reverse=True)
