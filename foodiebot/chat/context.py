from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..recommendations.models import LatLng, Place
from .models import SelectedRestaurant

MAX_CONTEXT_RECOMMENDATIONS = 8
MAX_CUISINE_TAGS = 3
GENERIC_TYPES = frozenset({"restaurant", "food", "point_of_interest", "establishment"})

PRICE_LEVEL_DESCRIPTIONS = (
    "Very Affordable",
    "Affordable",
    "Moderate",
    "Expensive",
    "Very Expensive",
)

NO_RECOMMENDATIONS_NOTICE = (
    "⚠️ No restaurant recommendations available. "
    "The user needs to search for restaurants first.\n"
)


def price_level_description(level: int) -> str:
    if 0 <= level < len(PRICE_LEVEL_DESCRIPTIONS):
        return PRICE_LEVEL_DESCRIPTIONS[level]
    return "Unknown"


def format_location(location: LatLng) -> str:
    return f"Latitude {location.lat:.4f}, Longitude {location.lng:.4f}"


def _describe_place(index: int, place: Place) -> list[str]:
    lines = [f"\n{index}. **{place.name}**"]

    rating = f"{place.rating:g}" if place.rating is not None else "N/A"
    reviews = f"({place.user_ratings_total} reviews)" if place.user_ratings_total else ""
    lines.append(f"   Rating: {rating} {reviews}".rstrip())

    distance = getattr(place, "distance", None)
    if distance is not None:
        lines.append(f"   Distance: {distance / 1000:.2f} km")
    else:
        lines.append("   Distance: Unknown")

    lines.append(f"   Address: {place.vicinity or 'Address not available'}")

    if place.price_level is not None:
        symbol = "$" * (place.price_level + 1)
        lines.append(f"   Price: {symbol} ({price_level_description(place.price_level)})")

    if place.opening_hours is not None and place.opening_hours.open_now is not None:
        status = "Currently Open" if place.opening_hours.open_now else "Currently Closed"
        lines.append(f"   Status: {status}")

    cuisine_types = [t for t in place.types if t not in GENERIC_TYPES]
    if cuisine_types:
        lines.append(f"   Type: {', '.join(cuisine_types[:MAX_CUISINE_TAGS])}")

    return lines


def _describe_menu(restaurant: SelectedRestaurant) -> list[str]:
    lines = [
        "",
        "",
        f"Currently Viewing Restaurant: **{restaurant.name}**",
        "Menu Details:",
    ]
    for category in restaurant.menu.categories:
        lines.append(f"\n**{category.name}:**")
        for item in category.items:
            entry = f"  • {item.name} - ${item.price}"
            if item.description:
                entry += f" ({item.description})"
            lines.append(entry)
    return lines


def build_context(
    recommendations: Sequence[Place] | None,
    user_location: LatLng | None,
    selected_restaurant: SelectedRestaurant | None = None,
) -> str:
    """Render what the assistant is allowed to talk about.

    Recommendations keep their incoming order and are cut to the first
    ``MAX_CONTEXT_RECOMMENDATIONS``.
    """
    parts: list[str] = []

    if user_location is not None:
        parts.append(f"📍 User's current location: {format_location(user_location)}\n\n")

    if recommendations:
        lines = ["Available nearby restaurants:"]
        for index, place in enumerate(recommendations[:MAX_CONTEXT_RECOMMENDATIONS], start=1):
            lines.extend(_describe_place(index, place))
        parts.append("\n".join(lines) + "\n")
    else:
        parts.append(NO_RECOMMENDATIONS_NOTICE)

    if selected_restaurant is not None and selected_restaurant.menu is not None:
        parts.append("\n".join(_describe_menu(selected_restaurant)) + "\n")

    return "".join(parts)


SYSTEM_PROMPT_TEMPLATE = """\
You are a friendly and knowledgeable AI restaurant assistant. Your name is "FoodieBot" 🤖

## Your Personality:
- Warm, helpful, and enthusiastic about food
- Concise but informative in your responses
- Use emojis occasionally to make conversations engaging
- Adapt your response style to match the user's tone

## Current Context:
- Current time: {current_time}
{context}

## Core Capabilities:
1. **Restaurant Recommendations**: Suggest restaurants based on user preferences (cuisine type, price, distance, ratings)
2. **Menu Guidance**: Help users choose dishes if menu information is available
3. **Comparisons**: Compare multiple restaurants based on specific criteria
4. **General Q&A**: Answer food-related questions and provide dining tips

## Response Guidelines:
1. **Be Relevant**: Always base your recommendations on the available restaurant data above
2. **Be Specific**: When recommending, mention restaurant name, rating, distance, and why it fits the user's needs
3. **Be Honest**: If no restaurants match the criteria or no data is available, say so clearly
4. **Be Conversational**: Remember the conversation context and refer back to previous exchanges when relevant
5. **Handle Languages**: Respond in the same language the user uses
6. **Keep it Focused**: Provide 1-3 recommendations unless asked for more

## Important Rules:
- Only recommend restaurants from the provided list above
- If user asks about a restaurant not in the list, explain you don't have information about it
- For menu questions, only answer if menu data is available
- Don't make up information about restaurants, ratings or menus"""


def format_current_time(now: datetime) -> str:
    """Weekday plus 12-hour clock, e.g. ``Saturday 07:05 PM``."""
    return now.strftime("%A %I:%M %p")


def build_system_prompt(context: str, now: datetime | None = None) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        current_time=format_current_time(now or datetime.now()),
        context=context,
    )
