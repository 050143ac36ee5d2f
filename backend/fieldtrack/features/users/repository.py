"""
User repository.

Data access layer for the User model.
"""

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.shared.repository import BaseRepository
from fieldtrack.shared.constants import UserRole
from .models import User


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        """
        Get user by email.

        Args:
            email: Email address (normalized to lower case)

        Returns:
            User if found, None otherwise
        """
        return await self.get_by(email=email.strip().lower())

    async def find_by_phone_or_email(self, phone: str, email: str) -> User | None:
        """
        Find a user holding either the phone number or the email.

        Used by signup to refuse duplicates.
        """
        result = await self.db.execute(
            select(User)
            .where(or_(User.phone == phone, User.email == email))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_field_officers(self) -> list[User]:
        """All users with the FIELD role, ordered by name."""
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.FIELD.value)
            .order_by(User.name)
        )
        return list(result.scalars().all())
