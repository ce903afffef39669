"""Pydantic schemas for Category API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from personal_finance.models.enums import CategoryType


class CategoryCreate(BaseModel):
    """Schema for creating or replacing a category."""

    name: str = Field(..., min_length=1, max_length=255)
    type: CategoryType
    current_period_sum: float = 0.0
    limit: str | None = Field(None, max_length=255)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: CategoryType
    current_period_sum: float
    limit: str | None
