"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from personal_finance.api.deps import get_auth_service, get_current_user
from personal_finance.core.request_utils import get_client_ip
from personal_finance.models import User
from personal_finance.schemas.auth import LoginRequest, MessageResponse, TokenResponse
from personal_finance.schemas.user import UserResponse
from personal_finance.services.auth import AuthService, InvalidCredentialsError, IpBlockedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Authenticate and open a session.

    Consecutive failures from one IP block it for a while; blocked IPs are
    rejected before their credentials are checked.
    """
    client_ip = get_client_ip(http_request) or "unknown"

    try:
        identity, token = await auth_service.login(
            username=request.username,
            password=request.password,
            client_ip=client_ip,
        )
    except (IpBlockedError, InvalidCredentialsError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return TokenResponse(
        username=identity.username,
        display_name=identity.display_name,
        access_token=token,
    )


@router.get("/logout", response_model=MessageResponse)
async def logout(
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """End the session of the presented token.

    Always succeeds; a missing or unknown token is simply ignored.
    """
    token = auth_service.token_provider.resolve(http_request.headers)
    if token:
        auth_service.logout(token)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the authenticated user."""
    return current_user
