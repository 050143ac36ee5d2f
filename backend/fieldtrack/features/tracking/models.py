"""
Tracking models.

Models:
- DutySession: One officer's working day (attendance) with its running distance
- LocationFix: Append-only log of GPS fixes
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, Integer, ForeignKey, Index, text
from sqlalchemy.orm import relationship
import uuid

from fieldtrack.models.base import Base
from fieldtrack.shared.constants import FixActivity


class DutySession(Base):
    """
    A field officer's duty day.

    Open while ended_at is NULL. At most one open session per officer,
    enforced by a partial unique index on officer_id.
    """

    __tablename__ = "duty_sessions"
    __table_args__ = (
        Index(
            "uq_duty_sessions_open_officer",
            "officer_id",
            unique=True,
            sqlite_where=text("ended_at IS NULL"),
            postgresql_where=text("ended_at IS NULL"),
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    officer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Start of day
    start_lat = Column(Float, nullable=True)
    start_lng = Column(Float, nullable=True)
    start_address = Column(String(500), nullable=True)
    started_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    start_odometer = Column(Float, nullable=True)

    # End of day
    end_lat = Column(Float, nullable=True)
    end_lng = Column(Float, nullable=True)
    end_address = Column(String(500), nullable=True)
    ended_at = Column(DateTime, nullable=True, index=True)
    end_odometer = Column(Float, nullable=True)

    # Running GPS total, replaced by the odometer delta on close when available
    total_distance_km = Column(Float, nullable=False, default=0.0)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    officer = relationship("User", back_populates="duty_sessions")
    fixes = relationship(
        "LocationFix",
        back_populates="session",
        order_by="LocationFix.captured_at",
        lazy="noload",
    )

    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"<DutySession {self.id} officer={self.officer_id} {state} {self.total_distance_km} km>"


class LocationFix(Base):
    """
    Single GPS observation.

    Never updated or deleted. session_id is NULL for legacy rows and for
    activity fixes (MEETING, SAMPLE, SALE) logged while off duty.
    """

    __tablename__ = "location_fixes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    officer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    session_id = Column(String(36), ForeignKey("duty_sessions.id"), nullable=True, index=True)

    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    address = Column(String(500), nullable=True)
    accuracy_m = Column(Float, nullable=True)
    activity = Column(String(20), nullable=False, default=FixActivity.TRAVEL.value)

    captured_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    session = relationship("DutySession", back_populates="fixes")

    def __repr__(self):
        return f"<LocationFix {self.id} ({self.lat}, {self.lng}) at {self.captured_at}>"
