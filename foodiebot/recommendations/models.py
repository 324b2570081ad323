from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class Geometry(BaseModel):
    location: LatLng


class OpeningHours(BaseModel):
    open_now: bool | None = None


class Place(BaseModel):
    """A place-search result as returned by the provider.

    Unknown provider fields are kept so they flow back to the client untouched.
    """

    model_config = ConfigDict(extra="allow")

    place_id: str
    name: str = ""
    geometry: Geometry
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    user_ratings_total: int | None = Field(default=None, ge=0)
    price_level: int | None = Field(default=None, ge=0, le=4)
    types: list[str] = Field(default_factory=list)
    vicinity: str | None = None
    opening_hours: OpeningHours | None = None

    @property
    def location(self) -> LatLng:
        return self.geometry.location


class RestaurantType(str, Enum):
    japanese = "japanese"
    italian = "italian"
    chinese = "chinese"
    mexican = "mexican"
    thai = "thai"
    indian = "indian"
    korean = "korean"
    french = "french"
    seafood = "seafood"
    cafe = "cafe"
    fast_food = "fast_food"
    american = "american"


class ScoredPlace(Place):
    original_place_id: str
    recommendation_score: int
    distance: float = Field(..., ge=0.0, description="Meters from the user")
    restaurant_type: RestaurantType
    custom_id: str


class RerankedPlace(ScoredPlace):
    context_score: int = 0
    final_score: int


class PriceRange(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class UserPreferences(BaseModel):
    price_range: PriceRange = PriceRange.medium
    min_rating: float = Field(default=4.0, ge=0.0, le=5.0)
    max_distance: float = Field(default=1000.0, description="Meters")
    cuisine_types: list[str] = Field(default_factory=list)


class PreferencesPatch(BaseModel):
    """Per-search overrides merged over the session preferences."""

    price_range: PriceRange | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    max_distance: float | None = Field(default=None, gt=0.0)
    cuisine_types: list[str] | None = None


class RecommendationRequest(BaseModel):
    places: list[Place] = Field(default_factory=list)
    user_location: LatLng
    preferences: PreferencesPatch | None = None
    hour: int | None = Field(
        default=None, ge=0, le=23, description="Local hour; defaults to the server clock"
    )
    weather: str = "sunny"
    limit: int = Field(default=10, ge=1, le=50)


class RecommendationResponse(BaseModel):
    recommendations: list[RerankedPlace]
    total_candidates: int
    hour: int
    weather: str
