"""Pydantic schemas for Transaction API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from personal_finance.models.enums import EntityType, Recurring, TransactionType


class TransactionCreate(BaseModel):
    """Schema for creating or replacing a transaction."""

    date_of_completion: date
    from_id: UUID
    from_type: EntityType
    to_id: UUID
    to_type: EntityType
    sum: float = Field(..., gt=0)
    recurring: Recurring = Recurring.NO
    description: str | None = Field(None, max_length=255)
    should_be_automatically_executed: bool = False


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date_of_completion: date
    from_id: UUID
    from_type: EntityType
    to_id: UUID
    to_type: EntityType
    sum: float
    recurring: Recurring
    description: str | None
    should_be_automatically_executed: bool
    kind: TransactionType | None
