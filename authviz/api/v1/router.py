"""
API Router Configuration.

This module builds the top-level router: health checks at the root and the
authorization analysis endpoints under the configured prefix.
"""

from fastapi import APIRouter

from authviz.api.v1.endpoints import authorization, health


def create_api_router(api_prefix: str = "/api/authorization") -> APIRouter:
    """Create the application router with analysis endpoints under ``api_prefix``."""
    api_router = APIRouter()

    api_router.include_router(
        health.router,
        tags=["Health"]
    )

    api_router.include_router(
        authorization.router,
        prefix=api_prefix.rstrip('/'),
        tags=["Authorization Analysis"]
    )

    return api_router
