"""
Field activity repositories.

Data access layer for Meeting, SampleDistribution and Sale.
"""

from datetime import datetime
from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.shared.repository import BaseRepository
from .models import Meeting, SampleDistribution, Sale

T = TypeVar("T", Meeting, SampleDistribution, Sale)


class OfficerRecordRepository(BaseRepository[T]):
    """Lookups shared by records that belong to one officer."""

    async def count_since(self, officer_id: str, since: datetime) -> int:
        """Number of the officer's records created at or after `since`."""
        result = await self.db.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.officer_id == officer_id)
            .where(self.model.created_at >= since)
        )
        return result.scalar() or 0

    async def get_for_officer(self, record_id: str, officer_id: str) -> T | None:
        """Record by ID, only if it belongs to the officer."""
        return await self.get_by(id=record_id, officer_id=officer_id)


class MeetingRepository(OfficerRecordRepository[Meeting]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Meeting)


class SampleRepository(OfficerRecordRepository[SampleDistribution]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, SampleDistribution)


class SaleRepository(OfficerRecordRepository[Sale]):
    """Repository for Sale operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Sale)

    async def revenue_since(self, officer_id: str, since: datetime) -> float:
        """Sum of total_amount over the officer's sales since `since`."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Sale.total_amount), 0.0))
            .where(Sale.officer_id == officer_id)
            .where(Sale.created_at >= since)
        )
        return float(result.scalar() or 0.0)
