"""
Health check endpoint.

Reports "degraded" until the lifespan has registered the upstream
booking client.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from guest_booking.models import HealthResponse
from guest_booking.services.sessions import registry

router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
)
async def get_health() -> HealthResponse:
    upstream = registry.provider is not None and registry.store is not None
    return HealthResponse(
        status="ok" if upstream else "degraded",
        version="0.1.0",
        timestamp=datetime.now(timezone.utc),
        upstream=upstream,
        open_wizards=len(registry),
    )
