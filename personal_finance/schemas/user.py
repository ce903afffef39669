"""Pydantic schemas for User and profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from personal_finance.models.enums import FamilyStatus, Gender, UserSettingKey


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    gender: Gender
    family_status: FamilyStatus
    age: int | None = Field(None, ge=0, le=150)
    education: str | None = Field(None, max_length=255)


class UserUpdate(BaseModel):
    """Schema for updating a user's profile fields.

    The password is changed through the dedicated profile endpoint only.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    gender: Gender
    family_status: FamilyStatus
    age: int | None = Field(None, ge=0, le=150)
    education: str | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    """Schema for user responses (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    gender: Gender
    family_status: FamilyStatus
    age: int | None
    education: str | None
    created_at: datetime


class PasswordChangeRequest(BaseModel):
    """Request for changing the current user's password."""

    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)
    matching_new_password: str = Field(..., min_length=6, max_length=128)


class UserSettingRequest(BaseModel):
    key: UserSettingKey
    value: str = Field(..., max_length=255)

    @field_validator("value")
    @classmethod
    def value_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value must not be blank")
        return v


class UserSettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    key: UserSettingKey
    value: str
