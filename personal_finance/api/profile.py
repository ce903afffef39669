"""Profile API endpoints - the authenticated user's own data and settings."""

from fastapi import APIRouter, Depends, Query, status

from personal_finance.api.deps import get_current_user, get_user_service
from personal_finance.models import User, UserSetting
from personal_finance.models.enums import UserSettingKey
from personal_finance.schemas.auth import MessageResponse
from personal_finance.schemas.user import (
    PasswordChangeRequest,
    UserResponse,
    UserSettingRequest,
    UserSettingResponse,
    UserUpdate,
)
from personal_finance.services.user import UserService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.put("", response_model=UserResponse)
async def update_profile(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Update the current user's profile.

    Changing the email ends the current login since tokens are bound to it.
    """
    return await user_service.update(current_user, data)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> None:
    await user_service.delete(current_user)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await user_service.change_password(current_user, data)
    return MessageResponse(message="Password changed")


@router.get("/settings", response_model=list[UserSettingResponse])
async def list_settings(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> list[UserSetting]:
    return await user_service.list_settings(current_user)


@router.get("/setting-by-key", response_model=UserSettingResponse)
async def get_setting_by_key(
    key: UserSettingKey = Query(...),
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserSetting:
    return await user_service.get_setting(current_user, key)


@router.post("/settings", response_model=UserSettingResponse)
async def set_setting(
    data: UserSettingRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserSetting:
    """Create or update a setting of the current user."""
    return await user_service.set_setting(current_user, data.key, data.value)
