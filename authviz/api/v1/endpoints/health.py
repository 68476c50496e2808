"""
Health check endpoint for the authorization analysis service.

Reports service status together with the active authorization data source.
"""

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from authviz import __version__


class HealthStatus(BaseModel):
    """Health status response model."""
    status: str
    timestamp: datetime
    version: str
    uptime_seconds: float
    environment: str
    data_source: str
    data_source_available: bool


# Track service start time for uptime calculation
_start_time = time.time()

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthStatus,
    summary="Basic health check",
    description="Returns basic health status and the active data source"
)
async def health_check(request: Request) -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Status, uptime and data source availability.
    """
    service = request.app.state.data_service
    config = request.app.state.config

    return HealthStatus(
        status="healthy" if service.is_available else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        environment=config.server.environment,
        data_source=service.source.value,
        data_source_available=service.is_available
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Returns 200 if service is alive"
)
async def liveness_check() -> Dict[str, str]:
    """Liveness check endpoint for Kubernetes liveness probes."""
    return {"status": "alive"}
