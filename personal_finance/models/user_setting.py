"""Per-user key/value settings (e.g. onboarding flags)."""

from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel
from personal_finance.models.enums import UserSettingKey


class UserSetting(BaseModel):
    """Setting stored as a key-value pair for one user."""

    __tablename__ = "user_settings"

    __table_args__ = (UniqueConstraint("owner_id", "key", name="uq_user_settings_owner_key"),)

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    key: Mapped[UserSettingKey] = mapped_column(
        Enum(UserSettingKey, name="user_setting_key"), nullable=False
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<UserSetting(key={self.key!r})>"
