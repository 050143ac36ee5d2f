"""
User model.

Field officers, admins and plain users share one table; the role column
decides which endpoints a user may call.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import relationship
import uuid

from fieldtrack.models.base import Base
from fieldtrack.shared.constants import UserRole


class User(Base):
    """
    Application user.

    Authenticates with email + password (bcrypt hash stored).
    Field officers own duty sessions and location fixes.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    phone = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(128), nullable=False)

    role = Column(String(10), nullable=False, default=UserRole.FIELD.value)

    # Territory
    state = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    assigned_regions = Column(JSON, nullable=True)  # villages/regions

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    duty_sessions = relationship(
        "DutySession",
        back_populates="officer",
        lazy="noload",
    )

    def __repr__(self):
        return f"<User {self.id} ({self.name}, {self.role})>"
