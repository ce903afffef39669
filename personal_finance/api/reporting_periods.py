"""Reporting period API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from personal_finance.api.deps import get_current_user, get_reporting_period_service
from personal_finance.models import ReportingPeriod, User
from personal_finance.schemas.reporting_period import (
    ReportingPeriodCreate,
    ReportingPeriodResponse,
)
from personal_finance.services.reporting_period import ReportingPeriodService

router = APIRouter(prefix="/reporting-periods", tags=["reporting-periods"])


@router.get("", response_model=list[ReportingPeriodResponse])
async def list_reporting_periods(
    current_user: User = Depends(get_current_user),
    service: ReportingPeriodService = Depends(get_reporting_period_service),
) -> list[ReportingPeriod]:
    return await service.list_periods(current_user.id)


@router.get("/{period_id}", response_model=ReportingPeriodResponse)
async def get_reporting_period(
    period_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ReportingPeriodService = Depends(get_reporting_period_service),
) -> ReportingPeriod:
    return await service.get(current_user.id, period_id)


@router.post("", response_model=ReportingPeriodResponse, status_code=status.HTTP_201_CREATED)
async def create_reporting_period(
    data: ReportingPeriodCreate,
    current_user: User = Depends(get_current_user),
    service: ReportingPeriodService = Depends(get_reporting_period_service),
) -> ReportingPeriod:
    return await service.create(current_user.id, data)


@router.put("/{period_id}", response_model=ReportingPeriodResponse)
async def update_reporting_period(
    period_id: UUID,
    data: ReportingPeriodCreate,
    current_user: User = Depends(get_current_user),
    service: ReportingPeriodService = Depends(get_reporting_period_service),
) -> ReportingPeriod:
    return await service.update(current_user.id, period_id, data)


@router.delete("/{period_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reporting_period(
    period_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ReportingPeriodService = Depends(get_reporting_period_service),
) -> None:
    await service.delete(current_user.id, period_id)
