"""Request authentication middleware using session-tracked JWTs.

Every request with an ``Authorization: Bearer <token>`` header is checked
against the session manager and, if the session is live, authenticated and
the resulting identity attached as ``request.state.identity``.

The middleware never rejects a request for a missing, expired or invalid
token; it only decides whether an identity is attached. Endpoints that need
a user enforce that through their dependencies. The one exception is a
verified token whose user has since been deleted, which is answered with
401 here; its session is dropped so later uses count as unauthenticated.
"""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from personal_finance.security import (
    IdentityNotFoundError,
    IdentityStore,
    InvalidTokenError,
    SessionManager,
    TokenProvider,
)

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """Attach the caller's identity to the request when its session is live.

    The token provider, session manager and identity store are read from
    ``app.state``, where the application factory installs them.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.identity = None

        token_provider: TokenProvider = request.app.state.token_provider
        token = token_provider.resolve(request.headers)
        if token is None:
            return await call_next(request)

        session_manager: SessionManager = request.app.state.session_manager
        if session_manager.is_expired(token):
            session_manager.invalidate(token)
            logger.debug(f"Expired or unknown session for: {request.method} {request.url.path}")
            return await call_next(request)

        identity_store: IdentityStore = request.app.state.identity_store
        try:
            identity = await token_provider.authenticate(token, identity_store)
        except InvalidTokenError as e:
            request.state.identity = None
            logger.warning(f"Invalid token for: {request.method} {request.url.path} - {e}")
            return await call_next(request)
        except IdentityNotFoundError as e:
            logger.warning(f"Token for unknown user on: {request.method} {request.url.path} - {e}")
            session_manager.invalidate(token)
            return JSONResponse(
                status_code=401,
                content={"detail": "User not found"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.identity = identity
        session_manager.touch(token)
        return await call_next(request)
