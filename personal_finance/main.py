"""Personal Finance Backend - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from personal_finance.api import api_router
from personal_finance.api.auth import router as auth_router
from personal_finance.api.health import router as health_router
from personal_finance.core import async_session_maker, settings
from personal_finance.core.lifespan import shutdown, startup
from personal_finance.core.logging import get_logger
from personal_finance.middleware import JWTAuthMiddleware

# Import all models to ensure they're registered with Base for Alembic
from personal_finance.models import (  # noqa: F401
    Account,
    Category,
    ReportingPeriod,
    Transaction,
    User,
    UserSetting,
)
from personal_finance.security import LoginLimiter, SessionManager, TokenProvider
from personal_finance.services.errors import FinanceError
from personal_finance.services.identity import DatabaseIdentityStore

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    tasks = await startup(logger, app.state.session_manager, app.state.login_limiter)

    yield

    logger.info("Shutting down...")
    await shutdown(logger, app.state.session_manager, tasks)


async def finance_error_handler(request: Request, exc: FinanceError) -> JSONResponse:
    """Report a rejected finance operation with its status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Each app owns its own session manager, login limiter and token
    provider; they live on ``app.state`` for the middleware and the
    dependencies to use.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Personal finance tracking API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.session_manager = SessionManager(
        expiration_seconds=settings.session_expiration_seconds,
        sweep_interval_seconds=settings.session_sweep_interval_seconds,
    )
    app.state.login_limiter = LoginLimiter(
        max_attempts=settings.login_max_attempts,
        block_seconds=settings.login_block_seconds,
    )
    app.state.token_provider = TokenProvider(issuer=settings.jwt_issuer)
    app.state.identity_store = DatabaseIdentityStore(async_session_maker)

    app.add_exception_handler(FinanceError, finance_error_handler)  # type: ignore[arg-type]

    app.add_middleware(JWTAuthMiddleware)

    # CORS middleware - MUST be outermost (added last in Starlette LIFO order)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    if settings.enable_metrics:
        from prometheus_fastapi_instrumentator import Instrumentator

        Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app).expose(
            app, endpoint="/metrics", include_in_schema=False
        )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(api_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
        }

    return app


# Application instance
app = create_app()
