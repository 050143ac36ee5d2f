"""
Formatting utilities for display.

Used in API responses and log lines.
"""

from datetime import datetime


def format_duration_hours(hours: float) -> str:
    """
    Format hours as 'Xh Ymin'.

    Args:
        hours: Time in hours (e.g., 2.5)

    Returns:
        Formatted string (e.g., '2h 30min')
    """
    if hours < 0:
        return "-"

    total_minutes = int(hours * 60)
    h = total_minutes // 60
    m = total_minutes % 60

    if h == 0:
        return f"{m}min"
    elif m == 0:
        return f"{h}h"
    else:
        return f"{h}h {m}min"


def format_distance_km(km: float) -> str:
    """
    Format distance.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '12.5 km' or '850 m')
    """
    if km < 1:
        return f"{int(km * 1000)} m"
    return f"{km:.1f} km"


def format_last_updated(timestamp: datetime | None) -> str:
    """Human-readable capture time for the admin live map."""
    if timestamp is None:
        return "No data"
    return timestamp.strftime("%Y-%m-%d %H:%M:%S")
