"""
Redis key namespace for location data.
"""

from enum import Enum


class KeyCategory(str, Enum):
    """Entity categories stored in Redis."""

    LOCATIONS = "locations"
    LOCATION_DETAILS = "locationdetails"
    WEATHER = "weather"


KEY_SEPARATOR = ":"


def build_key(category: KeyCategory, entity_id: int) -> str:
    """Build the Redis key for an entity of the given category."""
    return f"{KeyCategory(category).value}{KEY_SEPARATOR}{entity_id}"


def location_key(location_id: int) -> str:
    return build_key(KeyCategory.LOCATIONS, location_id)


def location_details_key(location_id: int) -> str:
    return build_key(KeyCategory.LOCATION_DETAILS, location_id)


def weather_key(location_id: int) -> str:
    return build_key(KeyCategory.WEATHER, location_id)
