"""
Field Activity Routes

Meetings, sample distribution and sales logged by field officers.
Mounted under /field; all endpoints require a FIELD-role bearer token.
"""

from fastapi import APIRouter, Depends, HTTPException

from fieldtrack.api.deps import get_activity_service, require_field_officer
from fieldtrack.features.activities import (
    ActivityOutcome,
    ActivityService,
    MeetingRequest,
    SampleFeedbackRequest,
    SampleRequest,
    SaleRequest,
)
from fieldtrack.features.activities.schemas import MeetingResponse, SampleResponse, SaleResponse
from fieldtrack.features.users import User
from fieldtrack.shared.constants import MeetingType

router = APIRouter()


def _respond(schema, outcome: ActivityOutcome):
    response = schema.model_validate(outcome.record)
    response.location_id = outcome.fix.id if outcome.fix else None
    return response


# === Meetings ===

@router.post("/meeting/one-to-one", response_model=MeetingResponse, status_code=201)
async def log_one_to_one_meeting(
    request: MeetingRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """Log a meeting with one farmer, seller, influencer or veterinarian."""
    outcome = await service.log_meeting(officer.id, request, meeting_type=MeetingType.ONE_TO_ONE)
    return _respond(MeetingResponse, outcome)


@router.post("/meeting/group", response_model=MeetingResponse, status_code=201)
async def log_group_meeting(
    request: MeetingRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """Log a demo, training or feedback session with a group."""
    outcome = await service.log_meeting(officer.id, request, meeting_type=MeetingType.GROUP)
    return _respond(MeetingResponse, outcome)


@router.post("/meeting", response_model=MeetingResponse, status_code=201)
async def log_meeting(
    request: MeetingRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """Log a meeting whose kind is given by `type` in the body."""
    outcome = await service.log_meeting(officer.id, request)
    return _respond(MeetingResponse, outcome)


# === Samples ===

@router.post("/sample", response_model=SampleResponse, status_code=201)
async def distribute_sample(
    request: SampleRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """Log a product sample handed out."""
    outcome = await service.log_sample(officer.id, request)
    return _respond(SampleResponse, outcome)


@router.patch("/sample/{sample_id}/feedback", response_model=SampleResponse)
async def sample_feedback(
    sample_id: str,
    request: SampleFeedbackRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """Record feedback on one of the officer's samples."""
    sample = await service.record_sample_feedback(officer.id, sample_id, request)
    if not sample:
        raise HTTPException(status_code=404, detail="Sample not found")
    return SampleResponse.model_validate(sample)


# === Sales ===

@router.post("/sale", response_model=SaleResponse, status_code=201)
async def record_sale(
    request: SaleRequest,
    officer: User = Depends(require_field_officer),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Record a sale.

    total_amount is computed here from quantity and price per unit.
    """
    outcome = await service.log_sale(officer.id, request)
    return _respond(SaleResponse, outcome)
