"""User API endpoints.

Registration is public; every other endpoint is admin-only (``ROLE_ADMIN``).
Users manage their own account through the profile endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from personal_finance.api.deps import get_user_service, require_authority
from personal_finance.models import User
from personal_finance.schemas.common import Page
from personal_finance.schemas.user import UserCreate, UserResponse, UserUpdate
from personal_finance.security import ADMIN_AUTHORITY, Identity
from personal_finance.services.user import UserService

router = APIRouter(prefix="/users", tags=["users"])

require_admin = require_authority(ADMIN_AUTHORITY)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserCreate,
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Register a new user."""
    return await user_service.create(data)


@router.get("", response_model=Page[UserResponse] | UserResponse)
async def list_users(
    email: str | None = Query(None, description="Look up a single user by email"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Page[UserResponse] | UserResponse:
    """List users with pagination, or fetch one by ``?email=``."""
    if email is not None:
        return UserResponse.model_validate(await user_service.get_by_email(email))

    users, total = await user_service.list_users(page=page, page_size=page_size)
    return Page[UserResponse].build(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.put("", response_model=UserResponse)
async def update_user_by_email(
    data: UserUpdate,
    email: str = Query(...),
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> User:
    user = await user_service.get_by_email(email)
    return await user_service.update(user, data)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_by_email(
    email: str = Query(...),
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> None:
    user = await user_service.get_by_email(email)
    await user_service.delete(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> User:
    return await user_service.get(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> User:
    user = await user_service.get(user_id)
    return await user_service.update(user, data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    _: Identity = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> None:
    user = await user_service.get(user_id)
    await user_service.delete(user)
