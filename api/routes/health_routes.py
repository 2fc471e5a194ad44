"""Liveness and readiness probes for the Users API.

/health answers as long as the process is serving requests. /ready also
requires a finished startup and a database that answers SELECT 1.
"""

from fastapi import APIRouter, HTTPException, Request
from starlette import status

from core.config import get_settings
from core.database import check_db_connection
from schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="healthy", service=get_settings().service_name)


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={
        503: {
            "description": "Startup failed or still running, or the users "
            "database is unreachable",
            "content": {
                "application/json": {"example": {"detail": "Database unavailable"}}
            },
        }
    },
)
async def ready(request: Request) -> HealthResponse:
    """Report whether the service can take user traffic."""
    state = request.app.state

    startup_error = getattr(state, "init_error", None)
    if startup_error:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Initialization failed: {startup_error}",
        )

    if not getattr(state, "init_done", False):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Starting",
        )

    try:
        await check_db_connection(state.engine)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from exc

    return HealthResponse(status="ready", service=get_settings().service_name)
