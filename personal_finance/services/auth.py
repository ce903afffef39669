"""Authentication service: password hashing and the login flow."""

import logging
import math

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

from personal_finance.security import (
    Identity,
    IdentityStore,
    LoginLimiter,
    SessionManager,
    TokenProvider,
)

logger = logging.getLogger(__name__)

# Argon2 password hasher with recommended parameters
# Memory: 64 MiB, Time: 3 iterations, Parallelism: 4
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid username or password."""

    pass


class IpBlockedError(AuthError):
    """Too many consecutive failed logins from the client IP."""

    pass


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison."""
    try:
        ph.verify(password_hash, password)
        return True
    except VerifyMismatchError:
        return False


class AuthService:
    """Logs users in and out against the shared session state."""

    def __init__(
        self,
        identity_store: IdentityStore,
        token_provider: TokenProvider,
        session_manager: SessionManager,
        login_limiter: LoginLimiter,
    ):
        self.identity_store = identity_store
        self.token_provider = token_provider
        self.session_manager = session_manager
        self.login_limiter = login_limiter

    async def login(self, username: str, password: str, client_ip: str) -> tuple[Identity, str]:
        """Verify credentials and open a session.

        Blocked IPs are turned away before the credentials are looked at.

        Raises:
            IpBlockedError: the client IP is currently blocked.
            InvalidCredentialsError: unknown user or wrong password.
        """
        remaining = self.login_limiter.remaining_block_seconds(client_ip)
        if remaining > 0:
            minutes = math.ceil(remaining / 60)
            logger.warning(f"Rejected login from blocked IP {client_ip}")
            raise IpBlockedError(
                f"IP blocked for {minutes} minutes"
                " (max consecutive invalid login attempts reached)!"
            )

        identity = await self.identity_store.verify_credentials(username, password)
        if identity is None:
            failures = self.login_limiter.record_failure(client_ip)
            logger.info(f"Failed login for {username} from {client_ip} (attempt {failures})")
            raise InvalidCredentialsError("Invalid username or password")

        self.login_limiter.record_success(client_ip)
        token = self.token_provider.issue(identity)
        self.session_manager.touch(token)
        logger.info(f"User logged in: {identity.username}")
        return identity, token

    def logout(self, token: str) -> None:
        self.session_manager.invalidate(token)
