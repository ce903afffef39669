"""Category service - CRUD over income and expense categories."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from personal_finance.models import Category
from personal_finance.models.category import SYSTEM_CATEGORY_PREFIX
from personal_finance.models.enums import CategoryType, EntityType
from personal_finance.schemas.category import CategoryCreate
from personal_finance.services.errors import NameAlreadyExistsError, get_owned
from personal_finance.services.transaction import TransactionService

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = "Category with this ID does not exist!"
CATEGORY_NAME_TAKEN = "Category with this name already exists for the current user!"

EXAMPLE_CATEGORY_NAMES = ("Храна", "Комунални сметки", "Кола", "Кредит", "Наем", "Застраховка")

_VISIBLE = ~Category.name.startswith(SYSTEM_CATEGORY_PREFIX, autoescape=True)


class CategoryService:
    """Service for managing a user's categories.

    System categories (``SYS_*``) are hidden from listings and totals.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _name_exists(self, owner_id: UUID, name: str) -> bool:
        result = await self.db.execute(
            select(Category.id).where(Category.owner_id == owner_id, Category.name == name)
        )
        return result.first() is not None

    async def list_categories(
        self, owner_id: UUID, category_type: CategoryType | None = None
    ) -> list[Category]:
        query = select(Category).where(Category.owner_id == owner_id, _VISIBLE)
        if category_type is not None:
            query = query.where(Category.type == category_type)
        result = await self.db.execute(query.order_by(Category.created_at, Category.name))
        return list(result.scalars().all())

    async def total_current_period_sum(self, owner_id: UUID, category_type: CategoryType) -> float:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Category.current_period_sum), 0.0)).where(
                Category.owner_id == owner_id, Category.type == category_type, _VISIBLE
            )
        )
        return float(result.scalar() or 0.0)

    async def get(self, owner_id: UUID, category_id: UUID) -> Category:
        return await get_owned(self.db, Category, category_id, owner_id, CATEGORY_NOT_FOUND)

    async def added_sum(
        self, owner_id: UUID, category_id: UUID, start_date: date, end_date: date
    ) -> float:
        """Amount booked against the category within the dates.

        Expense categories collect incoming transactions; income categories
        are the source of outgoing ones.
        """
        category = await self.get(owner_id, category_id)
        transactions = TransactionService(self.db)
        if category.type == CategoryType.EXPENSES:
            return await transactions.sum_into(
                owner_id, category.id, EntityType.CATEGORY, start_date, end_date
            )
        return await transactions.sum_out_of(
            owner_id, category.id, EntityType.CATEGORY, start_date, end_date
        )

    async def create(self, owner_id: UUID, data: CategoryCreate) -> Category:
        if await self._name_exists(owner_id, data.name):
            raise NameAlreadyExistsError(CATEGORY_NAME_TAKEN)

        category = Category(owner_id=owner_id, **data.model_dump())
        self.db.add(category)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def create_examples(self, owner_id: UUID) -> list[Category]:
        """Seed the starter expense categories, skipping existing names."""
        created = []
        for name in EXAMPLE_CATEGORY_NAMES:
            if await self._name_exists(owner_id, name):
                continue
            category = Category(owner_id=owner_id, name=name, type=CategoryType.EXPENSES)
            self.db.add(category)
            created.append(category)
        await self.db.flush()
        for category in created:
            await self.db.refresh(category)
        return created

    async def update(self, owner_id: UUID, category_id: UUID, data: CategoryCreate) -> Category:
        category = await self.get(owner_id, category_id)
        if data.name != category.name and await self._name_exists(owner_id, data.name):
            raise NameAlreadyExistsError(CATEGORY_NAME_TAKEN)

        for field, value in data.model_dump().items():
            setattr(category, field, value)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def update_limit(self, owner_id: UUID, category_id: UUID, limit: str | None) -> Category:
        category = await self.get(owner_id, category_id)
        category.limit = limit
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def delete(self, owner_id: UUID, category_id: UUID) -> None:
        category = await self.get(owner_id, category_id)
        await self.db.delete(category)
        await self.db.flush()
        logger.info(f"Deleted category {category_id}")
