"""Transaction model - money moving between accounts and categories."""

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, Enum, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel
from personal_finance.models.enums import EntityType, Recurring, TransactionType


class Transaction(BaseModel):
    """A single movement of money.

    Either end is an account or a category, identified by (id, type) pairs.
    The pair of types decides the kind:

    - CATEGORY -> ACCOUNT: income
    - ACCOUNT -> CATEGORY: expense
    - ACCOUNT -> ACCOUNT: transfer
    """

    __tablename__ = "transactions"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date_of_completion: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    from_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    from_type: Mapped[EntityType] = mapped_column(
        Enum(EntityType, name="entity_type"), nullable=False
    )
    to_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    to_type: Mapped[EntityType] = mapped_column(
        Enum(EntityType, name="entity_type"), nullable=False
    )
    sum: Mapped[float] = mapped_column(Float, nullable=False)
    recurring: Mapped[Recurring] = mapped_column(
        Enum(Recurring, name="recurring"), default=Recurring.NO, nullable=False
    )
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    should_be_automatically_executed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    @property
    def kind(self) -> TransactionType | None:
        return transaction_kind(self.from_type, self.to_type)

    def __repr__(self) -> str:
        return f"<Transaction {self.from_type}->{self.to_type} {self.sum}>"


def transaction_kind(from_type: EntityType, to_type: EntityType) -> TransactionType | None:
    """Classify a transaction by its endpoints; None for CATEGORY -> CATEGORY."""
    if from_type == EntityType.CATEGORY and to_type == EntityType.ACCOUNT:
        return TransactionType.INCOME
    if from_type == EntityType.ACCOUNT and to_type == EntityType.CATEGORY:
        return TransactionType.EXPENSE
    if from_type == EntityType.ACCOUNT and to_type == EntityType.ACCOUNT:
        return TransactionType.TRANSFER
    return None
