"""Database-backed identity store used by token auth and login."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from personal_finance.models.user import User
from personal_finance.security import Identity
from personal_finance.services.auth import hash_password, verify_password

logger = logging.getLogger(__name__)

# Hashed once so unknown users cost the same verification time as known ones
_DUMMY_HASH = hash_password("dummy-password-for-timing")


def identity_for(user: User) -> Identity:
    return Identity(user_id=user.id, username=user.email, display_name=user.name)


class DatabaseIdentityStore:
    """Resolves identities from the users table.

    Opens a short-lived session per lookup since it is called from the
    authentication middleware, outside any request-scoped session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _get_user(self, email: str) -> User | None:
        async with self.session_factory() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def lookup_identity_by_subject(self, subject: str) -> Identity | None:
        user = await self._get_user(subject)
        return identity_for(user) if user else None

    async def verify_credentials(self, username: str, password: str) -> Identity | None:
        user = await self._get_user(username)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            return None
        if not verify_password(password, user.password_hash):
            return None
        return identity_for(user)
