"""
Authorization analysis API endpoints.

Serves the analysis report, domain catalog, role hierarchy and diagrams from
the application's authorization data service. The paths and JSON shapes are
the ones the remote data service consumes.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from authviz.config import AuthvizConfig
from authviz.core.exceptions import AuthvizError
from authviz.models.analysis import AnalysisReport, AnalysisSummary
from authviz.models.catalog import DomainCatalog
from authviz.models.hierarchy import RoleHierarchyInfoPayload
from authviz.services.base import AuthorizationDataService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authorization Analysis"])


def get_data_service(request: Request) -> AuthorizationDataService:
    """Dependency returning the application's authorization data service."""
    return request.app.state.data_service


def get_app_config(request: Request) -> AuthvizConfig:
    """Dependency returning the application configuration."""
    return request.app.state.config


def _resolve_depth(max_depth: Optional[int], config: AuthvizConfig) -> int:
    return config.analysis.max_role_depth if max_depth is None else max_depth


def _server_error(error: AuthvizError) -> HTTPException:
    logger.error(f"Authorization data request failed: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error.message
    )


@router.get(
    "/report",
    response_model=AnalysisReport,
    summary="Analysis report",
    description="Returns the cached analysis report, running the analyzer when needed"
)
async def get_report(
    max_depth: Optional[int] = Query(None, ge=0, description="Deepest acceptable role hierarchy"),
    service: AuthorizationDataService = Depends(get_data_service),
    config: AuthvizConfig = Depends(get_app_config)
) -> AnalysisReport:
    try:
        return await service.get_analysis_report(_resolve_depth(max_depth, config))
    except AuthvizError as e:
        raise _server_error(e)


@router.get(
    "/summary",
    response_model=AnalysisSummary,
    summary="Analysis summary"
)
async def get_summary(
    max_depth: Optional[int] = Query(None, ge=0, description="Deepest acceptable role hierarchy"),
    service: AuthorizationDataService = Depends(get_data_service),
    config: AuthvizConfig = Depends(get_app_config)
) -> AnalysisSummary:
    try:
        return await service.get_analysis_summary(_resolve_depth(max_depth, config))
    except AuthvizError as e:
        raise _server_error(e)


@router.get(
    "/resource-catalog",
    response_model=DomainCatalog,
    summary="Domain catalog"
)
async def get_resource_catalog(
    service: AuthorizationDataService = Depends(get_data_service)
) -> DomainCatalog:
    return await service.get_catalog()


@router.get(
    "/roles",
    response_model=List[str],
    summary="Registered roles",
    description="Returns every role as a namespace:name string"
)
async def get_roles(
    service: AuthorizationDataService = Depends(get_data_service)
) -> List[str]:
    return [str(role) for role in await service.get_roles()]


@router.get(
    "/roles/hierarchy",
    response_model=List[RoleHierarchyInfoPayload],
    summary="Role hierarchy",
    description="Returns hierarchy summaries ordered by depth, then role string"
)
async def get_role_hierarchy(
    service: AuthorizationDataService = Depends(get_data_service)
) -> List[RoleHierarchyInfoPayload]:
    infos = await service.get_all_role_hierarchy_info()
    return [RoleHierarchyInfoPayload.from_info(info) for info in infos]


@router.get(
    "/diagrams/auth-flow",
    response_class=PlainTextResponse,
    summary="Authorization flow diagram"
)
async def get_auth_flow_diagram(
    service: AuthorizationDataService = Depends(get_data_service)
) -> str:
    return await service.get_authorization_flow_diagram()


@router.get(
    "/diagrams/role-hierarchy",
    response_class=PlainTextResponse,
    summary="Role hierarchy diagram"
)
async def get_role_hierarchy_diagram(
    service: AuthorizationDataService = Depends(get_data_service)
) -> str:
    return await service.get_role_hierarchy_diagram()


@router.post(
    "/refresh",
    response_model=AnalysisSummary,
    summary="Refresh analysis",
    description="Clears cached data, re-runs the analyzer and returns the new summary"
)
async def refresh(
    max_depth: Optional[int] = Query(None, ge=0, description="Deepest acceptable role hierarchy"),
    service: AuthorizationDataService = Depends(get_data_service),
    config: AuthvizConfig = Depends(get_app_config)
) -> AnalysisSummary:
    depth = _resolve_depth(max_depth, config)
    try:
        await service.refresh(depth)
        return await service.get_analysis_summary(depth)
    except AuthvizError as e:
        raise _server_error(e)
