"""Account service - CRUD, activation state and balance bookkeeping."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from personal_finance.models import Account, Category
from personal_finance.models.category import SYSTEM_EXPENSES_CATEGORY, SYSTEM_INCOME_CATEGORY
from personal_finance.models.enums import AccountType, EntityType, Recurring
from personal_finance.schemas.account import AccountCreate, AccountUpdate
from personal_finance.schemas.transaction import TransactionCreate
from personal_finance.services.errors import (
    AccountDeleteError,
    AccountTypeUpdateError,
    NameAlreadyExistsError,
    ResourceNotFoundError,
    get_owned,
)
from personal_finance.services.transaction import TransactionService

logger = logging.getLogger(__name__)

ACCOUNT_NOT_FOUND = "Account with this ID does not exist!"
ACCOUNT_NAME_TAKEN = "Account with this name already exists for the current user!"
BALANCE_SYNC_DESCRIPTION = "Account balance sync"

EXAMPLE_ACCOUNT_NAMES = ("Спестовна", "Пари в брой", "Банкова сметка")


class AccountService:
    """Service for managing a user's accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _name_exists(self, owner_id: UUID, name: str) -> bool:
        result = await self.db.execute(
            select(Account.id).where(Account.owner_id == owner_id, Account.name == name)
        )
        return result.first() is not None

    async def list_accounts(
        self, owner_id: UUID, account_type: AccountType | None = None
    ) -> list[Account]:
        """List accounts; without a type filter, deleted accounts are hidden."""
        query = select(Account).where(Account.owner_id == owner_id)
        if account_type is None:
            query = query.where(Account.type != AccountType.DELETED)
        else:
            query = query.where(Account.type == account_type)
        result = await self.db.execute(query.order_by(Account.created_at, Account.name))
        return list(result.scalars().all())

    async def balance_sum(self, owner_id: UUID) -> float:
        """Sum of balances over activated accounts."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Account.balance), 0.0)).where(
                Account.owner_id == owner_id, Account.type == AccountType.ACTIVATED
            )
        )
        return float(result.scalar() or 0.0)

    async def get(self, owner_id: UUID, account_id: UUID) -> Account:
        return await get_owned(self.db, Account, account_id, owner_id, ACCOUNT_NOT_FOUND)

    async def income_sum(
        self, owner_id: UUID, account_id: UUID, start_date: date, end_date: date
    ) -> float:
        """Money that reached the account (incomes and incoming transfers)."""
        await self.get(owner_id, account_id)
        return await TransactionService(self.db).sum_into(
            owner_id, account_id, EntityType.ACCOUNT, start_date, end_date
        )

    async def expense_sum(
        self, owner_id: UUID, account_id: UUID, start_date: date, end_date: date
    ) -> float:
        """Money that left the account (expenses and outgoing transfers)."""
        await self.get(owner_id, account_id)
        return await TransactionService(self.db).sum_out_of(
            owner_id, account_id, EntityType.ACCOUNT, start_date, end_date
        )

    async def create(self, owner_id: UUID, data: AccountCreate) -> Account:
        if await self._name_exists(owner_id, data.name):
            raise NameAlreadyExistsError(ACCOUNT_NAME_TAKEN)

        account = Account(owner_id=owner_id, **data.model_dump())
        self.db.add(account)
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def create_examples(self, owner_id: UUID) -> list[Account]:
        """Seed the starter accounts, skipping names the user already has."""
        created = []
        for name in EXAMPLE_ACCOUNT_NAMES:
            if await self._name_exists(owner_id, name):
                continue
            account = Account(
                owner_id=owner_id, name=name, balance=0.0, type=AccountType.ACTIVATED
            )
            self.db.add(account)
            created.append(account)
        await self.db.flush()
        for account in created:
            await self.db.refresh(account)
        return created

    async def update(self, owner_id: UUID, account_id: UUID, data: AccountUpdate) -> Account:
        account = await self.get(owner_id, account_id)
        if data.name != account.name and await self._name_exists(owner_id, data.name):
            raise NameAlreadyExistsError(ACCOUNT_NAME_TAKEN)

        for field, value in data.model_dump().items():
            setattr(account, field, value)
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def _set_type(
        self, owner_id: UUID, account_id: UUID, account_type: AccountType
    ) -> Account:
        account = await self.get(owner_id, account_id)
        if account.type == AccountType.DELETED:
            action = "activated" if account_type == AccountType.ACTIVATED else "deactivated"
            raise AccountTypeUpdateError(f"Account is deleted and cannot be {action}!")
        account.type = account_type
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def activate(self, owner_id: UUID, account_id: UUID) -> Account:
        return await self._set_type(owner_id, account_id, AccountType.ACTIVATED)

    async def deactivate(self, owner_id: UUID, account_id: UUID) -> Account:
        return await self._set_type(owner_id, account_id, AccountType.DEACTIVATED)

    async def update_goal(self, owner_id: UUID, account_id: UUID, goal: float) -> Account:
        account = await self.get(owner_id, account_id)
        account.goal = goal
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def _system_category(self, owner_id: UUID, name: str) -> Category:
        result = await self.db.execute(
            select(Category).where(Category.owner_id == owner_id, Category.name == name)
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise ResourceNotFoundError(f"System category {name} does not exist!")
        return category

    async def sync_balance(self, owner_id: UUID, account_id: UUID, balance: float) -> Account:
        """Bring the balance to ``balance`` by booking the difference.

        An increase is recorded as income from the system income category,
        a decrease as an expense to the system expenses category, so the
        adjustment shows up in the transaction history.
        """
        account = await self.get(owner_id, account_id)
        difference = balance - account.balance
        if difference == 0:
            return account

        if difference > 0:
            category = await self._system_category(owner_id, SYSTEM_INCOME_CATEGORY)
            endpoints = {
                "from_id": category.id,
                "from_type": EntityType.CATEGORY,
                "to_id": account.id,
                "to_type": EntityType.ACCOUNT,
            }
        else:
            category = await self._system_category(owner_id, SYSTEM_EXPENSES_CATEGORY)
            endpoints = {
                "from_id": account.id,
                "from_type": EntityType.ACCOUNT,
                "to_id": category.id,
                "to_type": EntityType.CATEGORY,
            }

        await TransactionService(self.db).create(
            owner_id,
            TransactionCreate(
                date_of_completion=date.today(),
                sum=abs(difference),
                recurring=Recurring.NO,
                description=BALANCE_SYNC_DESCRIPTION,
                **endpoints,
            ),
        )
        await self.db.refresh(account)
        logger.info(f"Synced balance of account {account_id} to {balance}")
        return account

    async def delete(self, owner_id: UUID, account_id: UUID) -> Account:
        """Soft-delete an account; only empty accounts can be deleted."""
        account = await self.get(owner_id, account_id)
        if account.type == AccountType.DELETED:
            raise AccountDeleteError("Account has already been deleted!")
        if account.balance != 0:
            raise AccountDeleteError("Account balance must be zero to delete account!")
        account.type = AccountType.DELETED
        await self.db.flush()
        await self.db.refresh(account)
        return account
