"""Health check API endpoints."""

from fastapi import APIRouter

from labelgraph.config import settings
from labelgraph.schemas.api import HealthCheckResponse
from labelgraph.services.validation import DEFAULT_REGISTRY

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check endpoint",
    description="Check if the service is running and the rule registry is loaded",
    operation_id="get_service_health_status",
)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(
        status="healthy" if len(DEFAULT_REGISTRY) else "degraded",
        version=settings.app_version,
        service=settings.app_name,
    )
