"""Reporting period service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from personal_finance.models import ReportingPeriod
from personal_finance.schemas.reporting_period import ReportingPeriodCreate
from personal_finance.services.errors import get_owned

REPORTING_PERIOD_NOT_FOUND = "Reporting period with this ID does not exist!"


class ReportingPeriodService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_periods(self, owner_id: UUID) -> list[ReportingPeriod]:
        result = await self.db.execute(
            select(ReportingPeriod)
            .where(ReportingPeriod.owner_id == owner_id)
            .order_by(ReportingPeriod.end_date)
        )
        return list(result.scalars().all())

    async def get(self, owner_id: UUID, period_id: UUID) -> ReportingPeriod:
        return await get_owned(
            self.db, ReportingPeriod, period_id, owner_id, REPORTING_PERIOD_NOT_FOUND
        )

    async def create(self, owner_id: UUID, data: ReportingPeriodCreate) -> ReportingPeriod:
        period = ReportingPeriod(owner_id=owner_id, **data.model_dump())
        self.db.add(period)
        await self.db.flush()
        await self.db.refresh(period)
        return period

    async def update(
        self, owner_id: UUID, period_id: UUID, data: ReportingPeriodCreate
    ) -> ReportingPeriod:
        period = await self.get(owner_id, period_id)
        period.end_date = data.end_date
        period.end_sum = data.end_sum
        await self.db.flush()
        await self.db.refresh(period)
        return period

    async def delete(self, owner_id: UUID, period_id: UUID) -> None:
        period = await self.get(owner_id, period_id)
        await self.db.delete(period)
        await self.db.flush()
