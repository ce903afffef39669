# Token sessions, JWT handling and login limiting
from personal_finance.security.identity import (
    ADMIN_AUTHORITY,
    Identity,
    IdentityStore,
)
from personal_finance.security.login_limiter import LoginLimiter
from personal_finance.security.session_manager import SessionManager
from personal_finance.security.token_provider import (
    IdentityNotFoundError,
    InvalidTokenError,
    TokenError,
    TokenProvider,
)

__all__ = [
    "ADMIN_AUTHORITY",
    "Identity",
    "IdentityStore",
    "IdentityNotFoundError",
    "InvalidTokenError",
    "LoginLimiter",
    "SessionManager",
    "TokenError",
    "TokenProvider",
]
