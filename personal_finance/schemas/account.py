"""Pydantic schemas for Account API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from personal_finance.models.enums import AccountType


class AccountCreate(BaseModel):
    """Schema for creating or replacing an account."""

    name: str = Field(..., min_length=1, max_length=255)
    balance: float = 0.0
    goal: float | None = None
    type: AccountType = AccountType.ACTIVATED


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    balance: float
    goal: float | None
    type: AccountType


class AccountUpdate(BaseModel):
    """Schema for replacing an account's editable fields.

    The activation state changes only through the activate, deactivate and
    delete operations.
    """

    name: str = Field(..., min_length=1, max_length=255)
    balance: float
    goal: float | None = None
