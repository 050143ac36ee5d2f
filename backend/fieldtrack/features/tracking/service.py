"""
Tracking Service

Orchestrates attendance and live distance tracking:
- Start / end of duty day
- Live fixes -> DistanceAccumulator -> guarded distance update
- Officer and admin tracking views

Writes to a session's distance run under `session_locks` and are committed
before the lock is released, so the next fix for the same session always
starts from the committed total.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.features.users.models import User
from fieldtrack.features.users.repository import UserRepository
from fieldtrack.shared.constants import FixActivity
from fieldtrack.shared.formatters import format_distance_km, format_duration_hours
from fieldtrack.shared.geo import is_valid_coordinate
from fieldtrack.shared.timeutils import start_of_day, to_naive_utc

from .accumulator import DistanceAccumulator, Fix, FixResult, FixStatus
from .exceptions import InvalidFix, SessionAlreadyOpen, SessionClosed, TrackingError
from .locks import SessionLockRegistry, session_locks
from .models import DutySession, LocationFix
from .repository import DutySessionRepository, LocationFixRepository

logger = logging.getLogger(__name__)


# Optimistic-update attempts before giving up on a fix
MAX_WRITE_ATTEMPTS = 3


@dataclass
class TrackOutcome:
    """Result of a tracking tick."""
    fix: LocationFix
    session: DutySession
    result: FixResult


@dataclass
class OfficerTracking:
    """Live tracking state of one officer (admin view)."""
    officer: User
    latest_fix: Optional[LocationFix]
    distance_travelled_km: float
    is_active: bool


class TrackingService:
    """
    Attendance and live distance tracking for field officers.

    Usage:
        service = TrackingService(db)
        session = await service.start_day(officer_id, Fix(12.97, 77.59), odometer=1000)
        outcome = await service.track_location(officer_id, 12.9718, 77.5946)
        session = await service.end_day(officer_id, Fix(12.98, 77.60), odometer=1042)
    """

    def __init__(
        self,
        db: AsyncSession,
        accumulator: Optional[DistanceAccumulator] = None,
        locks: Optional[SessionLockRegistry] = None,
    ):
        """
        Args:
            db: Async database session
            accumulator: Distance accumulator (defaults to settings thresholds)
            locks: Per-session lock registry (defaults to the global one)
        """
        self.db = db
        self.accumulator = accumulator or DistanceAccumulator.from_settings()
        self.locks = locks or session_locks
        self.sessions = DutySessionRepository(db)
        self.fixes = LocationFixRepository(db)
        self.users = UserRepository(db)

    # =========================================================================
    # Attendance
    # =========================================================================

    async def start_day(
        self,
        officer_id: str,
        location: Fix,
        odometer: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> DutySession:
        """
        Open a duty session for the officer.

        Raises:
            SessionAlreadyOpen: If the officer already has an open session
            InvalidFix: If the start location is unusable
        """
        if not is_valid_coordinate(location.lat, location.lng):
            raise InvalidFix("Start location requires valid latitude and longitude")

        existing = await self.sessions.find_open_session(officer_id)
        if existing:
            raise SessionAlreadyOpen()

        try:
            session = await self.sessions.start_session(
                officer_id=officer_id,
                lat=location.lat,
                lng=location.lng,
                address=location.address,
                odometer=odometer,
                started_at=to_naive_utc(now),
            )
            await self.db.commit()
        except IntegrityError:
            # Another request opened a session between the check and the insert
            await self.db.rollback()
            logger.warning(f"Concurrent start_day for officer {officer_id} rejected")
            raise SessionAlreadyOpen()

        logger.info(f"Duty session {session.id} started for officer {officer_id}")
        return session

    async def end_day(
        self,
        officer_id: str,
        location: Optional[Fix] = None,
        odometer: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> DutySession:
        """
        Close the officer's open duty session.

        Raises:
            SessionClosed: If there is no open session
        """
        session = await self.sessions.find_open_session(officer_id)
        if not session:
            raise SessionClosed("No active day found")

        async with self.locks.hold(session.id):
            # Pick up fixes committed while we waited for the lock
            await self.db.refresh(session)
            final_km = self.accumulator.close_session(
                session,
                final_fix=location,
                end_odometer=odometer,
                closed_at=now,
            )
            if not await self.sessions.persist_close(session):
                await self.db.rollback()
                raise SessionClosed("Day already ended")
            await self.db.commit()

        logger.info(
            f"Duty session {session.id} ended for officer {officer_id}: "
            f"{format_distance_km(final_km)}"
        )
        return session

    # =========================================================================
    # Live tracking
    # =========================================================================

    async def track_location(
        self,
        officer_id: str,
        lat,
        lng,
        accuracy: Optional[float] = None,
        address: str = "",
        activity: FixActivity = FixActivity.TRAVEL,
        captured_at: Optional[datetime] = None,
    ) -> TrackOutcome:
        """
        Record a live fix and advance the session's distance.

        The fix is appended to the log, compared against the previous fix
        of the same session, and the session total is updated if the
        increment falls inside the noise band.

        Raises:
            InvalidFix: Missing or unusable coordinates (nothing is stored)
            SessionClosed: Officer has no open session, or it ended while this
                fix waited for the session lock (nothing is stored)
        """
        if not is_valid_coordinate(lat, lng):
            raise InvalidFix("Latitude and longitude required")

        session = await self.sessions.find_open_session(officer_id)
        if not session:
            raise SessionClosed("No active day found")

        captured_at = to_naive_utc(captured_at) or datetime.utcnow()
        new_fix = Fix(
            lat=float(lat),
            lng=float(lng),
            captured_at=captured_at,
            accuracy_m=accuracy,
            address=address or "",
        )

        async with self.locks.hold(session.id):
            # The day may have ended while we waited for the lock
            await self.db.refresh(session)
            if session.ended_at is not None:
                raise SessionClosed("Day already ended", total_km=session.total_distance_km)

            fix = await self.fixes.append_fix(
                officer_id,
                session.id,
                lat=new_fix.lat,
                lng=new_fix.lng,
                accuracy_m=accuracy,
                address=new_fix.address,
                activity=FixActivity(activity).value,
                captured_at=captured_at,
            )
            try:
                result = await self._accumulate(session, fix, new_fix)
            except TrackingError:
                # Session closed underneath us: drop the appended fix too
                await self.db.rollback()
                raise
            await self.db.commit()

        if result.accepted:
            logger.info(
                f"Distance updated for officer {officer_id}: +{result.increment_km:.3f} km "
                f"(Total: {result.total_km:.2f} km)"
            )
        return TrackOutcome(fix=fix, session=session, result=result)

    async def _accumulate(self, session: DutySession, fix: LocationFix, new_fix: Fix) -> FixResult:
        """Run the accumulator and store the total, retrying on stale writes."""
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            if session.ended_at is not None:
                raise SessionClosed("Day already ended", total_km=session.total_distance_km)

            previous = await self.fixes.find_latest_fix(session.id, exclude_id=fix.id)
            expected_total = session.total_distance_km or 0.0
            result = self.accumulator.record_fix(session, previous, new_fix)

            if result.status == FixStatus.SESSION_CLOSED:
                raise SessionClosed("Day already ended", total_km=result.total_km)
            if not result.accepted:
                return result

            stored = await self.sessions.update_session_distance(
                session, result.total_km, expected_total
            )
            if stored:
                return result

            logger.warning(
                f"Stale distance write for session {session.id} "
                f"(attempt {attempt}/{MAX_WRITE_ATTEMPTS}), retrying"
            )

        raise SessionClosed(
            "Could not record distance, session is being updated elsewhere",
            total_km=session.total_distance_km,
        )

    # =========================================================================
    # Officer views
    # =========================================================================

    async def dashboard(self, officer_id: str) -> tuple[Optional[DutySession], Optional[LocationFix]]:
        """Open session (if any) and the officer's last fix."""
        session = await self.sessions.find_open_session(officer_id)
        last_fix = await self.fixes.find_latest_for_officer(officer_id)
        return session, last_fix

    async def today_summary(self, officer_id: str, now: Optional[datetime] = None) -> dict:
        """
        Today's distance and whether the officer is on duty.

        Returns:
            Dict with distance_traveled_km, is_active and duration
        """
        now = to_naive_utc(now) or datetime.utcnow()
        session = await self.sessions.find_latest_since(officer_id, start_of_day(now))
        if not session:
            return {"distance_traveled_km": 0.0, "is_active": False, "duration": None}

        end = session.ended_at or now
        hours = (end - session.started_at).total_seconds() / 3600
        return {
            "distance_traveled_km": session.total_distance_km or 0.0,
            "is_active": session.is_open,
            "duration": format_duration_hours(hours),
        }

    async def current_location(self, officer_id: str) -> Optional[LocationFix]:
        return await self.fixes.find_latest_for_officer(officer_id)

    async def location_history(
        self,
        officer_id: str,
        hours: int,
        now: Optional[datetime] = None,
    ) -> list[LocationFix]:
        """Fixes captured in the last `hours` hours, oldest first."""
        now = to_naive_utc(now) or datetime.utcnow()
        return await self.fixes.history(officer_id, now - timedelta(hours=hours))

    # =========================================================================
    # Admin views
    # =========================================================================

    async def officer_tracking(self, officer: User, now: Optional[datetime] = None) -> OfficerTracking:
        """Latest fix, today's distance and on-duty flag for one officer."""
        now = to_naive_utc(now) or datetime.utcnow()
        latest_fix = await self.fixes.find_latest_for_officer(officer.id)
        open_session = await self.sessions.find_open_session(officer.id)
        today = await self.sessions.find_latest_since(officer.id, start_of_day(now))
        return OfficerTracking(
            officer=officer,
            latest_fix=latest_fix,
            distance_travelled_km=(today.total_distance_km or 0.0) if today else 0.0,
            is_active=open_session is not None,
        )

    async def live_locations(self, now: Optional[datetime] = None) -> list[OfficerTracking]:
        """Tracking state of every field officer."""
        officers = await self.users.list_field_officers()
        return [await self.officer_tracking(officer, now=now) for officer in officers]

    async def replay_session(self, session_id: str) -> tuple[DutySession, float, int]:
        """
        Recompute a session's GPS distance from its fix log.

        Returns:
            (session, replayed_total_km, fix_count)

        Raises:
            LookupError: If the session does not exist
        """
        session = await self.sessions.get_by_id(session_id)
        if not session:
            raise LookupError(f"Duty session {session_id} not found")
        fixes = await self.fixes.for_session(session_id)
        return session, self.accumulator.accumulate_path(fixes), len(fixes)
