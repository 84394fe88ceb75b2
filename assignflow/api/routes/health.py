"""Health check endpoint."""

from fastapi import APIRouter, Request

from assignflow.api.models.health import HealthResponse

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return health status and whether the deadline sweeper is running."""
    sweeper = getattr(request.app.state, "deadline_sweeper", None)
    return HealthResponse(
        status="healthy",
        sweeper_running=bool(sweeper is not None and sweeper.running),
    )
