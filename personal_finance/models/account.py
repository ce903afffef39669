"""Account model - places money is held (cash, bank, savings)."""

from uuid import UUID

from sqlalchemy import Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel
from personal_finance.models.enums import AccountType


class Account(BaseModel):
    """A user's money account.

    Deleting an account only flips its type to DELETED; the row stays so
    past transactions keep a valid target.
    """

    __tablename__ = "accounts"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    goal: Mapped[float | None] = mapped_column(Float, nullable=True)
    type: Mapped[AccountType] = mapped_column(
        Enum(AccountType, name="account_type"), default=AccountType.ACTIVATED, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.type})>"
