"""Health check endpoints for monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from portalgrid.core.dependencies import get_service
from portalgrid.core.services import LayoutService

router = APIRouter()


@router.get("")
async def health(
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """Basic health check endpoint."""
    healthy = await layout_service.health_check()
    return {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "portalgrid-api",
    }
