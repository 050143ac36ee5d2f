"""
Field activity module.

Usage:
    from fieldtrack.features.activities import ActivityService, SaleRequest

Components:
- ActivityService: Meetings, sample distribution, sales and daily counters
- Meeting, SampleDistribution, Sale: SQLAlchemy models
"""

from .models import Meeting, SampleDistribution, Sale
from .repository import MeetingRepository, SampleRepository, SaleRepository
from .schemas import (
    MeetingRequest,
    SampleRequest,
    SampleFeedbackRequest,
    SaleRequest,
)
from .service import ActivityService, ActivityOutcome

__all__ = [
    # Models
    "Meeting",
    "SampleDistribution",
    "Sale",
    # Repositories
    "MeetingRepository",
    "SampleRepository",
    "SaleRepository",
    # Schemas
    "MeetingRequest",
    "SampleRequest",
    "SampleFeedbackRequest",
    "SaleRequest",
    # Service
    "ActivityService",
    "ActivityOutcome",
]
