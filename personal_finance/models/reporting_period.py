"""Reporting period model - savings targets with an end date."""

from datetime import date
from uuid import UUID

from sqlalchemy import Date, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel


class ReportingPeriod(BaseModel):
    __tablename__ = "reporting_periods"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_sum: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<ReportingPeriod until {self.end_date}>"
