"""
Shared utilities (NOT business logic).

Usage:
    from fieldtrack.shared import haversine, is_valid_coordinate
    from fieldtrack.shared.formatters import format_distance_km
"""
from .geo import (
    haversine,
    is_valid_coordinate,
    EARTH_RADIUS_KM,
)
from .formatters import (
    format_duration_hours,
    format_distance_km,
    format_last_updated,
)
from .constants import (
    UserRole,
    FixActivity,
    DEFAULT_SIGNUP_ROLE,
)
from .repository import BaseRepository

__all__ = [
    # geo
    "haversine",
    "is_valid_coordinate",
    "EARTH_RADIUS_KM",
    # formatters
    "format_duration_hours",
    "format_distance_km",
    "format_last_updated",
    # constants
    "UserRole",
    "FixActivity",
    "DEFAULT_SIGNUP_ROLE",
    # repository
    "BaseRepository",
]
