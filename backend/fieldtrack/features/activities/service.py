"""
Field activity service.

Meetings, sample distribution and sales logged by field officers.

Every record that carries a location also writes a tagged fix
(MEETING / SAMPLE / SALE) to the location log:
- on duty: through TrackingService.track_location, so the trip to the
  activity counts towards the day's distance
- off duty: appended without a session; it shows up in the officer's
  history but never counts towards any distance
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.features.tracking import (
    Fix,
    InvalidFix,
    LocationFix,
    SessionClosed,
    TrackingService,
)
from fieldtrack.features.tracking.schemas import LocationIn
from fieldtrack.shared.constants import FixActivity, MeetingType, SaleType
from fieldtrack.shared.geo import is_valid_coordinate
from fieldtrack.shared.timeutils import start_of_day, to_naive_utc

from .models import Meeting, SampleDistribution, Sale
from .repository import MeetingRepository, SampleRepository, SaleRepository
from .schemas import MeetingRequest, SampleFeedbackRequest, SampleRequest, SaleRequest

logger = logging.getLogger(__name__)


@dataclass
class ActivityOutcome:
    """A stored activity record and the tagged fix logged with it."""
    record: Union[Meeting, SampleDistribution, Sale]
    fix: Optional[LocationFix]


def _to_fix(location: Optional[LocationIn]) -> Optional[Fix]:
    if location is None:
        return None
    if not is_valid_coordinate(location.lat, location.lng):
        raise InvalidFix("Activity location requires valid latitude and longitude")
    return Fix(lat=float(location.lat), lng=float(location.lng), address=location.address or "")


def _place(request, fix: Optional[Fix]) -> dict:
    return {
        "village": request.village.strip(),
        "district": request.district.strip(),
        "state": request.state.strip(),
        "lat": fix.lat if fix else None,
        "lng": fix.lng if fix else None,
        "address": fix.address if fix else None,
    }


class ActivityService:
    """
    Logging of meetings, samples and sales.

    Usage:
        service = ActivityService(db)
        outcome = await service.log_sale(officer_id, SaleRequest(product_name="Feed", ...))
        counts = await service.today_counts(officer_id)
    """

    def __init__(self, db: AsyncSession, tracking: Optional[TrackingService] = None):
        self.db = db
        self.tracking = tracking or TrackingService(db)
        self.meetings = MeetingRepository(db)
        self.samples = SampleRepository(db)
        self.sales = SaleRepository(db)

    # =========================================================================
    # Logging
    # =========================================================================

    async def log_meeting(
        self,
        officer_id: str,
        request: MeetingRequest,
        meeting_type: Optional[MeetingType] = None,
        now: Optional[datetime] = None,
    ) -> ActivityOutcome:
        """
        Store a meeting.

        Args:
            officer_id: Officer who held the meeting
            request: Meeting details
            meeting_type: Overrides request.type (fixed by the typed endpoints)
            now: Creation time (defaults to now, UTC)

        Raises:
            InvalidFix: If a location is given with unusable coordinates
        """
        meeting_type = meeting_type or request.type
        fix = _to_fix(request.location)

        fields = {
            "officer_id": officer_id,
            "type": meeting_type.value,
            "category": request.category.value,
            "notes": request.notes.strip(),
            "follow_up_required": request.follow_up_required,
            "follow_up_date": to_naive_utc(request.follow_up_date),
            **_place(request, fix),
        }
        if meeting_type == MeetingType.ONE_TO_ONE:
            fields["person_name"] = request.person_name.strip()
            fields["contact_number"] = request.contact_number.strip()
            if request.business_potential is not None:
                fields["business_potential"] = request.business_potential.model_dump()
        else:
            fields["attendees_count"] = request.attendees_count
            fields["meeting_kind"] = request.meeting_kind.strip()

        meeting = await self.meetings.create(created_at=self._created_at(now), **fields)
        return await self._finish(officer_id, meeting, fix, FixActivity.MEETING, now)

    async def log_sample(
        self,
        officer_id: str,
        request: SampleRequest,
        now: Optional[datetime] = None,
    ) -> ActivityOutcome:
        """Store a sample distribution."""
        fix = _to_fix(request.location)

        sample = await self.samples.create(
            officer_id=officer_id,
            product_name=request.product_name.strip(),
            product_sku=request.product_sku.strip(),
            quantity=request.quantity,
            unit=request.unit.strip(),
            recipient_name=request.recipient_name.strip(),
            recipient_contact=request.recipient_contact.strip(),
            recipient_category=request.recipient_category.value if request.recipient_category else None,
            purpose=request.purpose.value if request.purpose else None,
            expected_feedback_date=to_naive_utc(request.expected_feedback_date),
            created_at=self._created_at(now),
            **_place(request, fix),
        )
        return await self._finish(officer_id, sample, fix, FixActivity.SAMPLE, now)

    async def log_sale(
        self,
        officer_id: str,
        request: SaleRequest,
        now: Optional[datetime] = None,
    ) -> ActivityOutcome:
        """
        Store a sale.

        Customer fields follow the sale type: farmer for B2C,
        distributor for B2B. The other pair is left empty.
        """
        fix = _to_fix(request.location)

        quantity = request.quantity if request.quantity and request.quantity > 0 else 1
        price = request.price_per_unit if request.price_per_unit and request.price_per_unit > 0 else 0.0
        is_b2c = request.sale_type == SaleType.B2C

        sale = await self.sales.create(
            officer_id=officer_id,
            product_name=request.product_name.strip(),
            product_sku=request.product_sku.strip(),
            pack_size=request.pack_size.strip(),
            quantity=quantity,
            price_per_unit=price,
            total_amount=quantity * price,
            sale_type=request.sale_type.value,
            farmer_name=request.farmer_name.strip() if is_b2c else None,
            farmer_contact=request.farmer_contact.strip() if is_b2c else None,
            distributor_name=None if is_b2c else request.distributor_name.strip(),
            distributor_contact=None if is_b2c else request.distributor_contact.strip(),
            distributor_type=request.distributor_type.strip(),
            is_repeat_order=request.is_repeat_order,
            payment_mode=request.payment_mode.value,
            payment_status=request.payment_status.value,
            delivery_status=request.delivery_status.value,
            delivery_date=to_naive_utc(request.delivery_date),
            notes=request.notes.strip(),
            created_at=self._created_at(now),
            **_place(request, fix),
        )
        return await self._finish(officer_id, sale, fix, FixActivity.SALE, now)

    async def record_sample_feedback(
        self,
        officer_id: str,
        sample_id: str,
        request: SampleFeedbackRequest,
    ) -> Optional[SampleDistribution]:
        """
        Mark a sample as followed up.

        Returns:
            Updated sample, None if the officer has no such sample
        """
        sample = await self.samples.get_for_officer(sample_id, officer_id)
        if not sample:
            return None

        sample = await self.samples.update(
            sample,
            feedback_received=True,
            feedback_notes=request.feedback_notes.strip(),
            converted_to_sale=request.converted_to_sale,
        )
        await self.db.commit()
        return sample

    # =========================================================================
    # Summary
    # =========================================================================

    async def today_counts(self, officer_id: str, now: Optional[datetime] = None) -> dict:
        """
        Today's activity counters.

        Returns:
            Dict with meetings, samples, sales and revenue
        """
        since = start_of_day(to_naive_utc(now) or datetime.utcnow())
        return {
            "meetings": await self.meetings.count_since(officer_id, since),
            "samples": await self.samples.count_since(officer_id, since),
            "sales": await self.sales.count_since(officer_id, since),
            "revenue": await self.sales.revenue_since(officer_id, since),
        }

    # =========================================================================
    # Internal
    # =========================================================================

    @staticmethod
    def _created_at(now: Optional[datetime]) -> datetime:
        return to_naive_utc(now) or datetime.utcnow()

    async def _finish(
        self,
        officer_id: str,
        record,
        fix: Optional[Fix],
        activity: FixActivity,
        now: Optional[datetime],
    ) -> ActivityOutcome:
        """Commit the record, then log its tagged fix."""
        await self.db.commit()
        logger.info(f"{type(record).__name__} {record.id} logged for officer {officer_id}")

        if fix is None:
            return ActivityOutcome(record=record, fix=None)

        try:
            outcome = await self.tracking.track_location(
                officer_id,
                fix.lat,
                fix.lng,
                address=fix.address,
                activity=activity,
                captured_at=now,
            )
            return ActivityOutcome(record=record, fix=outcome.fix)
        except SessionClosed:
            logged = await self.tracking.fixes.append_fix(
                officer_id,
                None,
                lat=fix.lat,
                lng=fix.lng,
                address=fix.address,
                activity=activity.value,
                captured_at=to_naive_utc(now),
            )
            await self.db.commit()
            # track_location may have rolled back, which expires loaded rows
            await self.db.refresh(record)
            logger.debug(f"Off-duty {activity.value} fix {logged.id} for officer {officer_id}")
            return ActivityOutcome(record=record, fix=logged)
