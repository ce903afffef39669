"""JWT issuing and validation.

Tokens are HS256-signed with a key generated when the provider is created,
so every token dies with the process. They carry no ``exp`` claim: expiry
is tracked by the session manager, which slides the window on each use.
"""

import logging
import secrets
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import jwt
from jwt.exceptions import PyJWTError

from personal_finance.security.identity import Identity, IdentityStore

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "
DISPLAY_NAME_CLAIM = "displayName"
REQUIRED_CLAIMS = ["sub", "iss", "iat"]


class TokenError(Exception):
    """Base token error."""

    pass


class InvalidTokenError(TokenError):
    """Signature, issuer or structure of the token is invalid."""

    pass


class IdentityNotFoundError(TokenError):
    """Token subject no longer resolves to a user."""

    pass


class TokenProvider:
    """Issues and validates session tokens."""

    def __init__(self, issuer: str, secret_key: bytes | None = None):
        self.issuer = issuer
        self._secret_key = secret_key if secret_key is not None else secrets.token_bytes(32)

    def issue(self, identity: Identity) -> str:
        """Create a signed token for an authenticated identity."""
        payload = {
            "sub": identity.username,
            "iss": self.issuer,
            "iat": datetime.now(UTC),
            DISPLAY_NAME_CLAIM: identity.display_name,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)
        return str(token)

    @staticmethod
    def resolve(headers: Mapping[str, str]) -> str | None:
        """Extract the bearer token from request headers, if well-formed."""
        auth_header = headers.get("Authorization") or headers.get("authorization") or ""
        if not auth_header.startswith(BEARER_PREFIX):
            return None
        token = auth_header[len(BEARER_PREFIX) :]
        return token or None

    def parse(self, token: str) -> dict[str, Any]:
        """Verify signature and issuer and return the claims."""
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    async def authenticate(self, token: str, identity_store: IdentityStore) -> Identity:
        """Validate a token and re-fetch the identity it names.

        Raises:
            InvalidTokenError: the token does not verify.
            IdentityNotFoundError: the subject has no matching user.
        """
        claims = self.parse(token)
        subject = claims["sub"]
        identity = await identity_store.lookup_identity_by_subject(subject)
        if identity is None:
            raise IdentityNotFoundError(f"User not found: {subject}")
        return identity
