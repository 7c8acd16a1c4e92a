"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
Also reports the active header stages so operators can audit their order.
"""

from fastapi import APIRouter, Request

from headerguard.interfaces.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and header stages.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    state = request.app.state
    return HealthResponse(
        status="ok",
        version=state.settings.version,
        header_stages=list(state.header_pipeline.stage_names),
    )
