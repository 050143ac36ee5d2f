"""
Time helpers.

All timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an aware datetime to naive UTC.

    Naive values are assumed to be UTC already and returned unchanged,
    as is None.
    """
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def start_of_day(now: datetime) -> datetime:
    """Midnight of the given day."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0)
