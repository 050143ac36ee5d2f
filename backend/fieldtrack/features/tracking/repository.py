"""
Tracking repositories.

Data access layer for DutySession and LocationFix. Together they form the
session store used by TrackingService:

- find_open_session(officer_id)
- find_latest_fix(session_id)
- append_fix(session_id, fix)
- update_session_distance(session, new_total)
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from fieldtrack.shared.repository import BaseRepository
from .models import DutySession, LocationFix


class DutySessionRepository(BaseRepository[DutySession]):
    """Repository for DutySession operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DutySession)

    async def find_open_session(self, officer_id: str) -> DutySession | None:
        """
        Get the officer's open session (most recently started).

        Args:
            officer_id: Officer's user ID

        Returns:
            Open session if any, None otherwise
        """
        result = await self.db.execute(
            select(DutySession)
            .where(DutySession.officer_id == officer_id)
            .where(DutySession.ended_at.is_(None))
            .order_by(DutySession.started_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_latest_since(self, officer_id: str, since: datetime) -> DutySession | None:
        """Most recent session started at or after `since` (open or closed)."""
        result = await self.db.execute(
            select(DutySession)
            .where(DutySession.officer_id == officer_id)
            .where(DutySession.started_at >= since)
            .order_by(DutySession.started_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def start_session(
        self,
        officer_id: str,
        lat: float,
        lng: float,
        address: str = "",
        odometer: float | None = None,
        started_at: datetime | None = None,
    ) -> DutySession:
        """
        Open a new duty session.

        Does not check for an existing open session; the service does.
        """
        return await self.create(
            officer_id=officer_id,
            start_lat=lat,
            start_lng=lng,
            start_address=address or "",
            start_odometer=odometer,
            started_at=started_at or datetime.utcnow(),
            total_distance_km=0.0,
        )

    async def _guarded_update(self, session: DutySession, expected: dict, values: dict) -> bool:
        """
        UPDATE the session row only if it is still open and matches `expected`.

        Pending in-memory changes are not autoflushed first. On success the
        written values become the committed state of `session`; on a
        mismatch `session` is reloaded from the database.
        """
        stmt = (
            update(DutySession)
            .where(DutySession.id == session.id)
            .where(DutySession.ended_at.is_(None))
        )
        for key, value in expected.items():
            stmt = stmt.where(getattr(DutySession, key) == value)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        with self.db.sync_session.no_autoflush:
            result = await self.db.execute(stmt)
            if result.rowcount != 1:
                await self.db.refresh(session)
                return False

        for key, value in values.items():
            set_committed_value(session, key, value)
        return True

    async def update_session_distance(
        self,
        session: DutySession,
        new_total: float,
        expected_total: float,
    ) -> bool:
        """
        Persist a new distance total with an optimistic check.

        Args:
            session: Session whose total was just advanced in memory
            new_total: Total to store
            expected_total: Total the increment was computed from

        Returns:
            True if stored; False if the session was closed or its total
            changed underneath (session is reloaded in that case)
        """
        return await self._guarded_update(
            session,
            expected={"total_distance_km": expected_total},
            values={"total_distance_km": new_total},
        )

    async def persist_close(self, session: DutySession) -> bool:
        """
        Persist the end-of-day fields set by DistanceAccumulator.close_session.

        Returns:
            False if the session had already been closed elsewhere
        """
        return await self._guarded_update(
            session,
            expected={},
            values={
                "ended_at": session.ended_at,
                "end_lat": session.end_lat,
                "end_lng": session.end_lng,
                "end_address": session.end_address,
                "end_odometer": session.end_odometer,
                "total_distance_km": session.total_distance_km,
            },
        )


class LocationFixRepository(BaseRepository[LocationFix]):
    """Repository for the append-only LocationFix log."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, LocationFix)

    async def append_fix(self, officer_id: str, session_id: str | None, **fields) -> LocationFix:
        """
        Append a fix to the log.

        Args:
            officer_id: Officer who sent the fix
            session_id: Duty session the fix belongs to
            **fields: lat, lng, accuracy_m, address, activity, captured_at

        Returns:
            Created fix
        """
        if fields.get("captured_at") is None:
            fields["captured_at"] = datetime.utcnow()
        return await self.create(officer_id=officer_id, session_id=session_id, **fields)

    async def find_latest_fix(
        self,
        session_id: str,
        exclude_id: int | None = None,
    ) -> LocationFix | None:
        """
        Most recent fix of a session by capture time.

        Args:
            session_id: Duty session ID
            exclude_id: Fix to leave out (usually the one just appended)

        Returns:
            Latest fix, None if the session has none
        """
        query = select(LocationFix).where(LocationFix.session_id == session_id)
        if exclude_id is not None:
            query = query.where(LocationFix.id != exclude_id)
        result = await self.db.execute(
            query
            .order_by(LocationFix.captured_at.desc(), LocationFix.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_latest_for_officer(self, officer_id: str) -> LocationFix | None:
        """Officer's most recent fix across all sessions."""
        result = await self.db.execute(
            select(LocationFix)
            .where(LocationFix.officer_id == officer_id)
            .order_by(LocationFix.captured_at.desc(), LocationFix.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def history(self, officer_id: str, since: datetime) -> list[LocationFix]:
        """
        Officer's fixes captured at or after `since`, oldest first.
        """
        result = await self.db.execute(
            select(LocationFix)
            .where(LocationFix.officer_id == officer_id)
            .where(LocationFix.captured_at >= since)
            .order_by(LocationFix.captured_at.asc(), LocationFix.id.asc())
        )
        return list(result.scalars().all())

    async def for_session(self, session_id: str) -> list[LocationFix]:
        """All fixes of a session in capture order."""
        result = await self.db.execute(
            select(LocationFix)
            .where(LocationFix.session_id == session_id)
            .order_by(LocationFix.captured_at.asc(), LocationFix.id.asc())
        )
        return list(result.scalars().all())
