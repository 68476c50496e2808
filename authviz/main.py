"""
Main FastAPI application entry point.

This module wires configuration, logging, the role registry and the
authorization data services into the analysis API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI

from authviz import __version__
from authviz.api.v1.router import create_api_router
from authviz.config import (
    AuthvizConfig,
    get_catalog_config,
    get_config,
    get_roles_config,
    setup_logging,
)
from authviz.core.context import AnalysisContext
from authviz.core.registry import InMemoryRoleRegistry, RoleRegistry
from authviz.models.catalog import DomainCatalog
from authviz.services.selector import DataServiceSelector

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: AuthvizConfig = app.state.config

    setup_logging(
        log_level=config.logging.level.upper(),
        log_format=config.logging.format,
        log_file=config.logging.file,
        enable_access_log=config.server.access_log
    )

    service = app.state.data_service
    logger.info(
        f"Authorization analysis API started with {service.source.value} data source",
        extra={"available": service.is_available}
    )

    yield

    remote = app.state.selector.remote
    if remote is not None:
        await remote.close()


def _load_catalog() -> DomainCatalog:
    return DomainCatalog.model_validate(get_catalog_config())


def create_app(
    config: Optional[AuthvizConfig] = None,
    registry: Optional[RoleRegistry] = None,
    catalog_provider: Optional[Callable[[], DomainCatalog]] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Application configuration; loaded from YAML when omitted
        registry: Role registry; seeded from roles.yaml when omitted
        catalog_provider: Domain catalog source; catalog.yaml when omitted

    Returns:
        Configured application
    """
    config = config or get_config()
    if registry is None:
        registry = InMemoryRoleRegistry.from_config(get_roles_config())

    context = AnalysisContext(
        registry=registry,
        catalog_provider=catalog_provider or _load_catalog
    )
    selector = DataServiceSelector.from_config(config, context)

    app = FastAPI(
        title="Authorization Analysis API",
        description="Role hierarchy analysis and authorization model reporting",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.config = config
    app.state.selector = selector
    app.state.data_service = selector.get_service(config.data_service.source)

    app.include_router(create_api_router(config.server.api_prefix))

    return app


def main():
    """Run the API with uvicorn."""
    config = get_config()
    uvicorn.run(
        "authviz.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        access_log=config.server.access_log
    )


if __name__ == "__main__":
    main()
