"""
Attendance and live distance tracking module.

Usage:
    from fieldtrack.features.tracking import TrackingService, DistanceAccumulator
    from fieldtrack.features.tracking import InvalidFix, SessionClosed

Components:
- DistanceAccumulator: Haversine distance with jitter/jump filtering
- TrackingService: Start/end of day, live fixes, tracking views
- SessionLockRegistry: Per-session write serialization
- DutySession, LocationFix: SQLAlchemy models
"""

from .accumulator import (
    DistanceAccumulator,
    Fix,
    FixResult,
    FixStatus,
    DEFAULT_MIN_INCREMENT_KM,
    DEFAULT_MAX_JUMP_KM,
)
from .exceptions import TrackingError, InvalidFix, SessionClosed, SessionAlreadyOpen
from .locks import SessionLockRegistry, session_locks
from .models import DutySession, LocationFix
from .repository import DutySessionRepository, LocationFixRepository
from .service import TrackingService, TrackOutcome, OfficerTracking

__all__ = [
    # Accumulator
    "DistanceAccumulator",
    "Fix",
    "FixResult",
    "FixStatus",
    "DEFAULT_MIN_INCREMENT_KM",
    "DEFAULT_MAX_JUMP_KM",
    # Errors
    "TrackingError",
    "InvalidFix",
    "SessionClosed",
    "SessionAlreadyOpen",
    # Concurrency
    "SessionLockRegistry",
    "session_locks",
    # Models
    "DutySession",
    "LocationFix",
    # Repositories
    "DutySessionRepository",
    "LocationFixRepository",
    # Service
    "TrackingService",
    "TrackOutcome",
    "OfficerTracking",
]
