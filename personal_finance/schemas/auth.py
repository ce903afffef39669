"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request for login. The username is the user's email."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Response with the session token."""

    username: str
    display_name: str
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
