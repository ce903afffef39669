"""Pydantic schemas for ReportingPeriod API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportingPeriodCreate(BaseModel):
    end_date: date
    end_sum: float = Field(..., ge=0)

    @field_validator("end_date")
    @classmethod
    def end_date_not_in_past(cls, v: date) -> date:
        if v < date.today():
            raise ValueError("end_date must be today or in the future")
        return v


class ReportingPeriodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    end_date: date
    end_sum: float
