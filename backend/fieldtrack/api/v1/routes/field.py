"""
Field Officer Routes

Attendance (start/end of day) and live location tracking.
All endpoints require a FIELD-role bearer token.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fieldtrack.api.deps import get_activity_service, get_tracking_service, require_field_officer
from fieldtrack.config import settings
from fieldtrack.features.activities import ActivityService
from fieldtrack.features.tracking import Fix, TrackingService
from fieldtrack.features.tracking.schemas import (
    DayActionRequest,
    DutySessionResponse,
    EndDayResponse,
    FieldDashboardResponse,
    FieldSummaryResponse,
    LocationFixResponse,
    TodaySummary,
    TrackLocationRequest,
    TrackLocationResponse,
)
from fieldtrack.features.users import User

router = APIRouter()


def _to_fix(request: DayActionRequest) -> Fix:
    return Fix(
        lat=request.location.lat,
        lng=request.location.lng,
        address=request.location.address,
    )


# === Dashboard ===

@router.get("/dashboard", response_model=FieldDashboardResponse)
async def field_dashboard(
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """Open duty session (if any) and last known location."""
    session, last_fix = await service.dashboard(officer.id)
    return FieldDashboardResponse(
        active_session=DutySessionResponse.model_validate(session) if session else None,
        last_location=LocationFixResponse.model_validate(last_fix) if last_fix else None,
    )


@router.get("/summary", response_model=FieldSummaryResponse)
async def field_summary(
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
    activities: ActivityService = Depends(get_activity_service),
):
    """Today's activity counters, distance and on-duty flag."""
    summary = await service.today_summary(officer.id)
    counts = await activities.today_counts(officer.id)
    return FieldSummaryResponse(today=TodaySummary(**summary, **counts))


# === Attendance ===

@router.post("/attendance/start", response_model=DutySessionResponse)
async def start_day(
    request: DayActionRequest,
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """
    Start the duty day.

    Fails with 400 if a day is already open.
    """
    session = await service.start_day(officer.id, _to_fix(request), odometer=request.odometer)
    return DutySessionResponse.model_validate(session)


@router.post("/attendance/end", response_model=EndDayResponse)
async def end_day(
    request: DayActionRequest,
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """
    End the duty day.

    Final distance is the odometer delta when both readings exist,
    otherwise the live GPS total.
    """
    session = await service.end_day(officer.id, _to_fix(request), odometer=request.odometer)
    return EndDayResponse(
        message="Day ended successfully",
        session=DutySessionResponse.model_validate(session),
    )


# === Live tracking ===

@router.post("/location/track", response_model=TrackLocationResponse)
async def track_location(
    request: TrackLocationRequest,
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """
    Record a live GPS fix.

    Returns the session's distance total after this fix.
    422 for bad coordinates, 409 when no day is open.
    """
    outcome = await service.track_location(
        officer.id,
        request.lat,
        request.lng,
        accuracy=request.accuracy,
        address=request.address,
        activity=request.activity,
        captured_at=request.captured_at,
    )
    return TrackLocationResponse(
        success=True,
        message="Location tracked",
        location_id=outcome.fix.id,
        status=outcome.result.status.value,
        increment_km=round(outcome.result.increment_km, 6),
        total_distance_km=outcome.result.total_km,
    )


@router.get("/location/current", response_model=LocationFixResponse)
async def current_location(
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """Latest logged fix."""
    fix = await service.current_location(officer.id)
    if not fix:
        raise HTTPException(status_code=404, detail="No location data found")
    return LocationFixResponse.model_validate(fix)


@router.get("/location/history", response_model=List[LocationFixResponse])
async def location_history(
    hours: Optional[int] = Query(default=None, ge=1, le=24 * 31),
    officer: User = Depends(require_field_officer),
    service: TrackingService = Depends(get_tracking_service),
):
    """Fixes from the last `hours` hours (default from settings), oldest first."""
    window = hours or settings.location_history_default_hours
    fixes = await service.location_history(officer.id, window)
    return [LocationFixResponse.model_validate(f) for f in fixes]
