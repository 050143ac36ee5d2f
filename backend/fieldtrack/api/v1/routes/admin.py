"""
Admin Tracking Routes

Live officer locations, per-officer tracking and location history.
All endpoints require an ADMIN-role bearer token.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fieldtrack.api.deps import get_tracking_service, require_admin
from fieldtrack.config import settings
from fieldtrack.features.tracking import OfficerTracking, TrackingService
from fieldtrack.features.tracking.schemas import (
    LocationFixResponse,
    OfficerInfo,
    OfficerTrackingResponse,
    SessionReplayResponse,
)
from fieldtrack.shared.formatters import format_last_updated

router = APIRouter(dependencies=[Depends(require_admin)])


def _to_response(tracking: OfficerTracking) -> OfficerTrackingResponse:
    fix = tracking.latest_fix
    return OfficerTrackingResponse(
        officer=OfficerInfo.model_validate(tracking.officer),
        location=LocationFixResponse.model_validate(fix) if fix else None,
        distance_travelled_km=tracking.distance_travelled_km,
        is_active=tracking.is_active,
        last_updated=format_last_updated(fix.captured_at if fix else None),
    )


@router.get("/tracking/live-locations", response_model=List[OfficerTrackingResponse])
async def live_locations(service: TrackingService = Depends(get_tracking_service)):
    """Latest fix, today's distance and on-duty flag for every field officer."""
    return [_to_response(t) for t in await service.live_locations()]


@router.get("/tracking/officer/{officer_id}", response_model=OfficerTrackingResponse)
async def officer_tracking(
    officer_id: str,
    service: TrackingService = Depends(get_tracking_service),
):
    """Tracking state of one officer."""
    officer = await service.users.get_by_id(officer_id)
    if not officer:
        raise HTTPException(status_code=404, detail="Officer not found")
    return _to_response(await service.officer_tracking(officer))


@router.get("/tracking/location-history/{officer_id}", response_model=List[LocationFixResponse])
async def officer_location_history(
    officer_id: str,
    hours: Optional[int] = Query(default=None, ge=1, le=24 * 31),
    service: TrackingService = Depends(get_tracking_service),
):
    """Officer's fixes from the last `hours` hours, oldest first."""
    window = hours or settings.location_history_default_hours
    fixes = await service.location_history(officer_id, window)
    return [LocationFixResponse.model_validate(f) for f in fixes]


@router.get("/tracking/session/{session_id}/replay", response_model=SessionReplayResponse)
async def replay_session(
    session_id: str,
    service: TrackingService = Depends(get_tracking_service),
):
    """
    Compare a session's stored distance with a replay of its fix log.

    A mismatch on a session closed without odometer readings points at
    lost or out-of-order writes.
    """
    try:
        session, replayed_km, fix_count = await service.replay_session(session_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Duty session not found")

    return SessionReplayResponse(
        session_id=session.id,
        stored_total_km=session.total_distance_km or 0.0,
        replayed_total_km=replayed_km,
        fix_count=fix_count,
    )
