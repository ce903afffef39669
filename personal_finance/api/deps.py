"""Shared FastAPI dependencies: current user and service factories."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from personal_finance.core import get_db
from personal_finance.models import User
from personal_finance.security import Identity
from personal_finance.services.account import AccountService
from personal_finance.services.auth import AuthService
from personal_finance.services.category import CategoryService
from personal_finance.services.reporting_period import ReportingPeriodService
from personal_finance.services.transaction import TransactionService
from personal_finance.services.user import UserService


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get auth service bound to the app's session state."""
    state = request.app.state
    return AuthService(
        identity_store=state.identity_store,
        token_provider=state.token_provider,
        session_manager=state.session_manager,
        login_limiter=state.login_limiter,
    )


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Dependency to get user service."""
    return UserService(db)


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    """Dependency to get account service."""
    return AccountService(db)


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    """Dependency to get category service."""
    return CategoryService(db)


def get_reporting_period_service(db: AsyncSession = Depends(get_db)) -> ReportingPeriodService:
    """Dependency to get reporting period service."""
    return ReportingPeriodService(db)


def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    """Dependency to get transaction service."""
    return TransactionService(db)


def get_current_identity(request: Request) -> Identity:
    """Identity attached by JWTAuthMiddleware; 401 when there is none."""
    identity: Identity | None = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def require_authority(authority: str) -> Callable[..., Identity]:
    """Dependency factory: 403 unless the caller's identity holds ``authority``."""

    def _check(identity: Identity = Depends(get_current_identity)) -> Identity:
        if authority not in identity.authorities:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return identity

    return _check


async def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the authenticated user within the request's database session."""
    user = await db.get(User, identity.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
