from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..recommendations.models import LatLng, Place, RerankedPlace


class Role(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"


class ConversationTurn(BaseModel):
    role: Role
    content: str


class ConversationState(BaseModel):
    turns: list[ConversationTurn] = Field(default_factory=list)


class MenuItem(BaseModel):
    name: str
    price: int | float | str
    description: str | None = None


class MenuCategory(BaseModel):
    name: str
    items: list[MenuItem] = Field(default_factory=list)


class Menu(BaseModel):
    categories: list[MenuCategory] = Field(default_factory=list)


class SelectedRestaurant(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    place_id: str | None = None
    menu: Menu | None = None


class ProxyMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_recommendations: bool = Field(default=False, alias="hasRecommendations")
    has_user_location: bool = Field(default=False, alias="hasUserLocation")
    has_selected_restaurant: bool = Field(default=False, alias="hasSelectedRestaurant")
    conversation_length: int = Field(default=0, ge=0, alias="conversationLength")


class ProxyRequest(BaseModel):
    messages: list[ConversationTurn] = Field(..., min_length=1)
    metadata: ProxyMetadata = Field(default_factory=ProxyMetadata)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProxyResponse(BaseModel):
    text: str
    ok: bool = True
    status_code: int | None = None


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)
    recommendations: list[RerankedPlace | Place] = Field(default_factory=list)
    user_location: LatLng | None = None
    selected_restaurant: SelectedRestaurant | None = None


class ChatResponse(BaseModel):
    response: str
    conversation_length: int
