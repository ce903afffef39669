"""Transaction service - validating and applying money movements.

A transaction changes balances when it is executed: incomes credit an
account and count toward the source category, expenses debit an account
and count toward the target category, transfers move money between
accounts. Updating a transaction undoes the stored one before applying the
new data; deleting undoes it.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from personal_finance.models import Account, Category, Transaction
from personal_finance.models.enums import AccountType, CategoryType, EntityType, TransactionType
from personal_finance.models.transaction import transaction_kind
from personal_finance.schemas.transaction import TransactionCreate
from personal_finance.services.errors import InvalidDataError, get_owned

logger = logging.getLogger(__name__)

TRANSACTION_NOT_FOUND = "Transaction with this ID does not exist!"
INVALID_FROM_TO = "Transaction contains invalid from-to data!"
INVALID_TYPE = "Transaction type is invalid!"

_KIND_ENDPOINTS = {
    TransactionType.INCOME: (EntityType.CATEGORY, EntityType.ACCOUNT),
    TransactionType.EXPENSE: (EntityType.ACCOUNT, EntityType.CATEGORY),
    TransactionType.TRANSFER: (EntityType.ACCOUNT, EntityType.ACCOUNT),
}

Endpoint = Account | Category


def parse_transaction_type(value: str | None) -> TransactionType | None:
    """Parse a case-insensitive kind filter; None means no filter."""
    if value is None:
        return None
    try:
        return TransactionType(value.upper())
    except ValueError:
        raise InvalidDataError(INVALID_TYPE) from None


def _kind_filter(kind: TransactionType | None) -> ColumnElement[bool] | None:
    if kind is None:
        return None
    from_type, to_type = _KIND_ENDPOINTS[kind]
    return and_(Transaction.from_type == from_type, Transaction.to_type == to_type)


def _apply(
    kind: TransactionType,
    source: Endpoint | None,
    target: Endpoint | None,
    amount: float,
) -> None:
    """Add a signed amount to the balances touched by a transaction.

    Either endpoint may be missing when undoing a transaction whose
    category has since been deleted; that side is skipped.
    """
    if kind == TransactionType.INCOME:
        if isinstance(target, Account):
            target.balance += amount
        if isinstance(source, Category):
            source.current_period_sum += amount
    elif kind == TransactionType.EXPENSE:
        if isinstance(source, Account):
            source.balance -= amount
        if isinstance(target, Category):
            target.current_period_sum += amount
    else:
        if isinstance(source, Account):
            source.balance -= amount
        if isinstance(target, Account):
            target.balance += amount


class TransactionService:
    """Service for managing a user's transactions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _query(
        self,
        owner_id: UUID,
        *conditions: ColumnElement[bool] | None,
    ) -> list[Transaction]:
        filters = [Transaction.owner_id == owner_id, *(c for c in conditions if c is not None)]
        result = await self.db.execute(
            select(Transaction)
            .where(*filters)
            .order_by(Transaction.date_of_completion.desc(), Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    async def _sum(self, owner_id: UUID, *conditions: ColumnElement[bool] | None) -> float:
        filters = [Transaction.owner_id == owner_id, *(c for c in conditions if c is not None)]
        result = await self.db.execute(
            select(func.coalesce(func.sum(Transaction.sum), 0.0)).where(*filters)
        )
        return float(result.scalar() or 0.0)

    async def list_transactions(
        self,
        owner_id: UUID,
        page: int = 1,
        page_size: int = 50,
        kind: TransactionType | None = None,
    ) -> tuple[list[Transaction], int]:
        """List transactions with pagination, newest first. Returns (items, total)."""
        filters = [Transaction.owner_id == owner_id]
        kind_filter = _kind_filter(kind)
        if kind_filter is not None:
            filters.append(kind_filter)

        count_result = await self.db.execute(select(func.count(Transaction.id)).where(*filters))
        total = count_result.scalar() or 0

        offset = (page - 1) * page_size
        result = await self.db.execute(
            select(Transaction)
            .where(*filters)
            .order_by(Transaction.date_of_completion.desc(), Transaction.created_at.desc())
            .offset(offset)
            .limit(page_size)
        )
        return list(result.scalars().all()), total

    async def total_sum(self, owner_id: UUID, kind: TransactionType | None = None) -> float:
        return await self._sum(owner_id, _kind_filter(kind))

    async def list_between_dates(
        self,
        owner_id: UUID,
        start_date: date,
        end_date: date,
        kind: TransactionType | None = None,
    ) -> list[Transaction]:
        """Transactions completed within [start_date, end_date]."""
        return await self._query(
            owner_id,
            Transaction.date_of_completion.between(start_date, end_date),
            _kind_filter(kind),
        )

    async def total_sum_between_dates(
        self,
        owner_id: UUID,
        start_date: date,
        end_date: date,
        kind: TransactionType | None = None,
    ) -> float:
        return await self._sum(
            owner_id,
            Transaction.date_of_completion.between(start_date, end_date),
            _kind_filter(kind),
        )

    async def list_by_from(
        self, owner_id: UUID, from_id: UUID, from_type: EntityType
    ) -> list[Transaction]:
        return await self._query(
            owner_id, Transaction.from_id == from_id, Transaction.from_type == from_type
        )

    async def list_by_to(
        self, owner_id: UUID, to_id: UUID, to_type: EntityType
    ) -> list[Transaction]:
        return await self._query(
            owner_id, Transaction.to_id == to_id, Transaction.to_type == to_type
        )

    async def sum_into(
        self, owner_id: UUID, to_id: UUID, to_type: EntityType, start_date: date, end_date: date
    ) -> float:
        """Total of transactions ending at the given entity within the dates."""
        return await self._sum(
            owner_id,
            Transaction.to_id == to_id,
            Transaction.to_type == to_type,
            Transaction.date_of_completion.between(start_date, end_date),
        )

    async def sum_out_of(
        self, owner_id: UUID, from_id: UUID, from_type: EntityType, start_date: date, end_date: date
    ) -> float:
        """Total of transactions starting at the given entity within the dates."""
        return await self._sum(
            owner_id,
            Transaction.from_id == from_id,
            Transaction.from_type == from_type,
            Transaction.date_of_completion.between(start_date, end_date),
        )

    async def get(self, owner_id: UUID, transaction_id: UUID) -> Transaction:
        return await get_owned(
            self.db, Transaction, transaction_id, owner_id, TRANSACTION_NOT_FOUND
        )

    async def _load_endpoint(self, entity_id: UUID, entity_type: EntityType) -> Endpoint | None:
        model = Account if entity_type == EntityType.ACCOUNT else Category
        return await self.db.get(model, entity_id)

    async def _validated_endpoints(
        self, owner_id: UUID, data: TransactionCreate
    ) -> tuple[TransactionType, Endpoint, Endpoint]:
        """Check the from/to pair is a legal transaction for this user.

        Both ends must exist and belong to the user, accounts must be
        ACTIVATED, and the kind-specific rules must hold.
        """
        kind = transaction_kind(data.from_type, data.to_type)
        if kind is None:
            raise InvalidDataError(INVALID_FROM_TO)

        source = await self._load_endpoint(data.from_id, data.from_type)
        target = await self._load_endpoint(data.to_id, data.to_type)
        for endpoint in (source, target):
            if endpoint is None or endpoint.owner_id != owner_id:
                raise InvalidDataError(INVALID_FROM_TO)
            if isinstance(endpoint, Account) and endpoint.type != AccountType.ACTIVATED:
                raise InvalidDataError(INVALID_FROM_TO)

        if kind == TransactionType.INCOME:
            valid = source.type == CategoryType.INCOME
        elif kind == TransactionType.EXPENSE:
            valid = target.type == CategoryType.EXPENSES
        else:
            valid = source.balance >= data.sum
        if not valid:
            raise InvalidDataError(INVALID_FROM_TO)
        return kind, source, target

    async def create(self, owner_id: UUID, data: TransactionCreate) -> Transaction:
        """Validate, execute and store a new transaction."""
        kind, source, target = await self._validated_endpoints(owner_id, data)
        _apply(kind, source, target, data.sum)

        transaction = Transaction(owner_id=owner_id, **data.model_dump())
        self.db.add(transaction)
        await self.db.flush()
        await self.db.refresh(transaction)
        logger.info(f"Executed {kind.lower()} of {data.sum} for user {owner_id}")
        return transaction

    async def _undo(self, transaction: Transaction) -> None:
        kind = transaction.kind
        if kind is None:
            return
        source = await self._load_endpoint(transaction.from_id, transaction.from_type)
        target = await self._load_endpoint(transaction.to_id, transaction.to_type)
        _apply(kind, source, target, -transaction.sum)

    async def update(
        self, owner_id: UUID, transaction_id: UUID, data: TransactionCreate
    ) -> Transaction:
        """Replace a transaction: undo the stored effect, then apply the new one."""
        transaction = await self.get(owner_id, transaction_id)
        await self._undo(transaction)
        await self.db.flush()

        kind, source, target = await self._validated_endpoints(owner_id, data)
        _apply(kind, source, target, data.sum)
        for field, value in data.model_dump().items():
            setattr(transaction, field, value)
        await self.db.flush()
        await self.db.refresh(transaction)
        return transaction

    async def delete(self, owner_id: UUID, transaction_id: UUID) -> None:
        """Undo a transaction's effect and remove it."""
        transaction = await self.get(owner_id, transaction_id)
        await self._undo(transaction)
        await self.db.delete(transaction)
        await self.db.flush()
