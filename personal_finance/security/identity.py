"""Authenticated identity and the store it is resolved from."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

USER_AUTHORITY = "ROLE_USER"
ADMIN_AUTHORITY = "ROLE_ADMIN"
DEFAULT_AUTHORITIES = (USER_AUTHORITY,)


@dataclass(frozen=True)
class Identity:
    """Who a request is acting as.

    Rebuilt from the user store on every authenticated request, never
    cached, so deleted users lose access on their next call. Registered
    users hold ``ROLE_USER`` only; ``ROLE_ADMIN`` is never granted by the
    database store, which keeps the admin-only endpoints closed.
    """

    user_id: UUID
    username: str
    display_name: str
    authorities: tuple[str, ...] = field(default=DEFAULT_AUTHORITIES)


class IdentityStore(Protocol):
    """Source of identities for token authentication and login."""

    async def lookup_identity_by_subject(self, subject: str) -> Identity | None: ...

    async def verify_credentials(self, username: str, password: str) -> Identity | None: ...
