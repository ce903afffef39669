"""Health endpoint: database reachability and session bookkeeping."""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from personal_finance.core import check_db_connection, settings
from personal_finance.security import SessionManager

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    active_sessions: int
    session_sweeper: str


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Report liveness; 503 when the database cannot be reached.

    The sweeper only runs under the application lifespan, so it shows as
    ``stopped`` in tests that skip startup.
    """
    db_ok = await check_db_connection()
    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    sessions: SessionManager = request.app.state.session_manager
    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=settings.app_version,
        database="connected" if db_ok else "disconnected",
        active_sessions=len(sessions),
        session_sweeper="running" if sessions.running else "stopped",
    )
