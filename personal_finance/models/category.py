"""Category model - sources of income and destinations of expenses."""

from uuid import UUID

from sqlalchemy import Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from personal_finance.models.base import BaseModel
from personal_finance.models.enums import CategoryType

# Hidden categories created for every user; balance syncs book against them
SYSTEM_CATEGORY_PREFIX = "SYS_"
SYSTEM_INCOME_CATEGORY = "SYS_INCOME"
SYSTEM_EXPENSES_CATEGORY = "SYS_EXPENSES"


class Category(BaseModel):
    """Income or expense category owned by a user."""

    __tablename__ = "categories"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[CategoryType] = mapped_column(
        Enum(CategoryType, name="category_type"), nullable=False
    )
    current_period_sum: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    limit: Mapped[str | None] = mapped_column("spending_limit", String(255), nullable=True)

    @property
    def is_system(self) -> bool:
        return self.name.startswith(SYSTEM_CATEGORY_PREFIX)

    def __repr__(self) -> str:
        return f"<Category {self.name} ({self.type})>"
