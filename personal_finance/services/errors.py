"""Domain errors raised by the finance services.

Each error carries the HTTP status it is reported with; a single exception
handler in the application turns them into ``{"detail": message}``.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession


class FinanceError(Exception):
    """Base error for rejected finance operations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(FinanceError):
    status_code = 404


class ResourceOwnershipError(FinanceError):
    status_code = 403

    def __init__(self, message: str = "User does not own this resource!"):
        super().__init__(message)


class InvalidDataError(FinanceError):
    pass


class NameAlreadyExistsError(FinanceError):
    pass


class AccountTypeUpdateError(FinanceError):
    """Activation state change is not allowed for the account."""

    pass


class AccountDeleteError(FinanceError):
    pass


async def get_owned(
    db: AsyncSession,
    model: type[Any],
    entity_id: UUID,
    owner_id: UUID,
    not_found_message: str,
) -> Any:
    """Load an entity by ID, checking it belongs to ``owner_id``."""
    entity = await db.get(model, entity_id)
    if entity is None:
        raise ResourceNotFoundError(not_found_message)
    if entity.owner_id != owner_id:
        raise ResourceOwnershipError()
    return entity
