"""
Tracking schemas.

Pydantic models for attendance and live location endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldtrack.shared.constants import FixActivity


# === Requests ===

class LocationIn(BaseModel):
    """Where an officer is (start/end of day)."""

    lat: Optional[float] = None
    lng: Optional[float] = None
    address: str = ""


class DayActionRequest(BaseModel):
    """Start-day / end-day payload."""

    location: LocationIn
    odometer: Optional[float] = Field(default=None, ge=0)


class TrackLocationRequest(BaseModel):
    """
    A live tracking tick.

    lat/lng are optional here so that a missing coordinate reaches the
    accumulator's InvalidFix check instead of a generic validation error.
    """

    lat: Optional[float] = None
    lng: Optional[float] = None
    accuracy: Optional[float] = Field(default=None, ge=0)
    address: str = ""
    activity: FixActivity = FixActivity.TRAVEL
    captured_at: Optional[datetime] = None


# === Responses ===

class DutySessionResponse(BaseModel):
    """Duty session as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    officer_id: str
    start_lat: Optional[float] = None
    start_lng: Optional[float] = None
    start_address: Optional[str] = None
    started_at: datetime
    start_odometer: Optional[float] = None
    end_lat: Optional[float] = None
    end_lng: Optional[float] = None
    end_address: Optional[str] = None
    ended_at: Optional[datetime] = None
    end_odometer: Optional[float] = None
    total_distance_km: float = 0.0


class LocationFixResponse(BaseModel):
    """Logged location fix."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    officer_id: str
    session_id: Optional[str] = None
    lat: float
    lng: float
    address: Optional[str] = None
    accuracy_m: Optional[float] = None
    activity: str
    captured_at: datetime


class TrackLocationResponse(BaseModel):
    """Response for a tracking tick."""

    success: bool
    message: str
    location_id: int
    status: str
    increment_km: float
    total_distance_km: float


class EndDayResponse(BaseModel):
    message: str
    session: DutySessionResponse


class FieldDashboardResponse(BaseModel):
    """Officer's home screen: open session and last known fix."""

    active_session: Optional[DutySessionResponse] = None
    last_location: Optional[LocationFixResponse] = None


class TodaySummary(BaseModel):
    meetings: int = 0
    samples: int = 0
    sales: int = 0
    revenue: float = 0.0
    distance_traveled_km: float = 0.0
    is_active: bool = False
    duration: Optional[str] = None


class FieldSummaryResponse(BaseModel):
    today: TodaySummary


class OfficerInfo(BaseModel):
    """Officer fields shown on the admin map."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone: str
    email: str
    state: Optional[str] = None
    district: Optional[str] = None


class OfficerTrackingResponse(BaseModel):
    """Live tracking state of one officer."""

    officer: OfficerInfo
    location: Optional[LocationFixResponse] = None
    distance_travelled_km: float = 0.0
    is_active: bool = False
    last_updated: str


class SessionReplayResponse(BaseModel):
    """Stored session total next to the total replayed from the fix log."""

    session_id: str
    stored_total_km: float
    replayed_total_km: float
    fix_count: int
