"""
Recommendation pipeline.

Responsibilities:
- Merge per-search overrides over the session preferences.
- Score every candidate place and tag it with a cuisine category.
- Keep the best ``limit`` places by recommendation score.
- Re-rank them for the current hour and weather.
"""
from __future__ import annotations

import logging
import time

from .models import (
    RecommendationRequest,
    RecommendationResponse,
    UserPreferences,
)
from .preferences import merge_preferences
from .reranker import current_hour, rerank
from .scoring import score_places

logger = logging.getLogger(__name__)


def get_recommendations(
    request: RecommendationRequest,
    preferences: UserPreferences | None = None,
) -> RecommendationResponse:
    start_time = time.time()

    merged = merge_preferences(preferences or UserPreferences(), request.preferences)
    hour = request.hour if request.hour is not None else current_hour()

    scored = score_places(request.places, request.user_location, merged)
    scored.sort(key=lambda p: p.recommendation_score, reverse=True)
    top = scored[: request.limit]

    ranked = rerank(top, hour, request.weather)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Ranked %d of %d places (hour=%d, weather=%s) in %sms",
        len(ranked), len(request.places), hour, request.weather, elapsed_ms,
    )

    return RecommendationResponse(
        recommendations=ranked,
        total_candidates=len(request.places),
        hour=hour,
        weather=request.weather,
    )
