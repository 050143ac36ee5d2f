"""
Database Models

Feature models live next to their feature (features/users, features/tracking,
features/activities) and are imported lazily here to avoid circular imports.
"""

from fieldtrack.models.base import Base

_MODEL_NAMES = ("User", "DutySession", "LocationFix", "Meeting", "SampleDistribution", "Sale")


def register_models():
    """Import every feature model so it is registered on Base.metadata."""
    from fieldtrack.features.users.models import User
    from fieldtrack.features.tracking.models import DutySession, LocationFix
    from fieldtrack.features.activities.models import Meeting, SampleDistribution, Sale
    return User, DutySession, LocationFix, Meeting, SampleDistribution, Sale


def __getattr__(name):
    if name in _MODEL_NAMES:
        return dict(zip(_MODEL_NAMES, register_models()))[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    *_MODEL_NAMES,
    "register_models",
]
