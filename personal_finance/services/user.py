"""User service - registration, profile management and per-user settings."""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from personal_finance.models import (
    Account,
    Category,
    ReportingPeriod,
    Transaction,
    User,
    UserSetting,
)
from personal_finance.models.category import SYSTEM_EXPENSES_CATEGORY, SYSTEM_INCOME_CATEGORY
from personal_finance.models.enums import CategoryType, UserSettingKey
from personal_finance.schemas.user import PasswordChangeRequest, UserCreate, UserUpdate
from personal_finance.services.auth import hash_password, verify_password
from personal_finance.services.errors import (
    InvalidDataError,
    NameAlreadyExistsError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User with this ID does not exist!"
USER_EMAIL_NOT_FOUND = "User with this email does not exist!"
SETTING_NOT_FOUND = "Setting with this key does not exist!"
EMAIL_TAKEN = "User with this email already exists!"

# Tables holding rows owned by a user, cleared before the user is deleted
_OWNED_MODELS = (Transaction, Account, Category, ReportingPeriod, UserSetting)


class UserService:
    """Service for managing users and their settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, data: UserCreate) -> User:
        """Register a user along with their system categories and defaults."""
        if await self._find_by_email(data.email) is not None:
            raise NameAlreadyExistsError(EMAIL_TAKEN)

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            gender=data.gender,
            family_status=data.family_status,
            age=data.age,
            education=data.education,
        )
        self.db.add(user)
        await self.db.flush()

        self.db.add_all(
            [
                Category(owner_id=user.id, name=SYSTEM_INCOME_CATEGORY, type=CategoryType.INCOME),
                Category(
                    owner_id=user.id, name=SYSTEM_EXPENSES_CATEGORY, type=CategoryType.EXPENSES
                ),
                UserSetting(
                    owner_id=user.id, key=UserSettingKey.HAS_LOGGED_IN_BEFORE, value="false"
                ),
            ]
        )
        await self.db.flush()
        await self.db.refresh(user)
        logger.info(f"Registered user: {user.email}")
        return user

    async def list_users(self, page: int = 1, page_size: int = 50) -> tuple[list[User], int]:
        """List users with pagination. Returns (users, total)."""
        count_result = await self.db.execute(select(func.count(User.id)))
        total = count_result.scalar() or 0

        offset = (page - 1) * page_size
        result = await self.db.execute(
            select(User).order_by(User.created_at, User.email).offset(offset).limit(page_size)
        )
        return list(result.scalars().all()), total

    async def get(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError(USER_NOT_FOUND)
        return user

    async def get_by_email(self, email: str) -> User:
        user = await self._find_by_email(email)
        if user is None:
            raise ResourceNotFoundError(USER_EMAIL_NOT_FOUND)
        return user

    async def update(self, user: User, data: UserUpdate) -> User:
        """Replace a user's profile fields.

        Changing the email changes the login name, so tokens issued for the
        old email stop resolving.
        """
        if data.email != user.email and await self._find_by_email(data.email) is not None:
            raise NameAlreadyExistsError(EMAIL_TAKEN)

        for field, value in data.model_dump().items():
            setattr(user, field, value)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete a user and everything they own."""
        for model in _OWNED_MODELS:
            await self.db.execute(delete(model).where(model.owner_id == user.id))
        await self.db.delete(user)
        await self.db.flush()
        logger.info(f"Deleted user: {user.email}")

    async def change_password(self, user: User, data: PasswordChangeRequest) -> None:
        if not verify_password(data.old_password, user.password_hash):
            raise InvalidDataError("Incorrect old password!")
        if data.new_password != data.matching_new_password:
            raise InvalidDataError("New passwords don't match!")
        user.password_hash = hash_password(data.new_password)
        await self.db.flush()
        logger.info(f"Password changed for user: {user.email}")

    async def list_settings(self, user: User) -> list[UserSetting]:
        result = await self.db.execute(
            select(UserSetting).where(UserSetting.owner_id == user.id).order_by(UserSetting.key)
        )
        return list(result.scalars().all())

    async def _find_setting(self, user: User, key: UserSettingKey) -> UserSetting | None:
        result = await self.db.execute(
            select(UserSetting).where(UserSetting.owner_id == user.id, UserSetting.key == key)
        )
        return result.scalar_one_or_none()

    async def get_setting(self, user: User, key: UserSettingKey) -> UserSetting:
        setting = await self._find_setting(user, key)
        if setting is None:
            raise ResourceNotFoundError(SETTING_NOT_FOUND)
        return setting

    async def set_setting(self, user: User, key: UserSettingKey, value: str) -> UserSetting:
        """Create or update a setting (upsert)."""
        setting = await self._find_setting(user, key)
        if setting is None:
            setting = UserSetting(owner_id=user.id, key=key, value=value)
            self.db.add(setting)
        else:
            setting.value = value
        await self.db.flush()
        await self.db.refresh(setting)
        return setting
