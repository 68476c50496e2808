"""
Remote authorization data service.

Fetches analysis data from an authorization API and rebuilds the same domain
objects the local service produces. Roles travel as ``namespace:name`` strings.
"""

import time
from typing import Any, List, Optional

import httpx

from authviz.config import DataServiceConfig, get_logger
from authviz.core.hierarchy import RoleHierarchyInfo, sort_role_hierarchy_infos
from authviz.models.analysis import AnalysisReport
from authviz.models.catalog import DomainCatalog
from authviz.models.hierarchy import RoleHierarchyInfoPayload
from authviz.services.base import AuthorizationDataService, DataSource

logger = get_logger(__name__)

DEFAULT_BASE_URL = "/api/authorization"
EMPTY_REPORT_CATEGORY = "Empty"


class RemoteAuthorizationDataService(AuthorizationDataService):
    """
    Authorization data service backed by an HTTP API.

    Relative base paths are resolved against the ``base_url`` of the supplied
    client. Transport and status errors propagate to the caller.
    """

    source = DataSource.REMOTE

    def __init__(self, client: httpx.AsyncClient, base_url: str = DEFAULT_BASE_URL):
        super().__init__()
        self._client = client
        self.base_url = base_url.rstrip('/')

    @property
    def is_available(self) -> bool:
        return bool(self.base_url)

    async def _load_report(self, max_depth: int) -> AnalysisReport:
        data = await self._get_json("report", "report", params={"max_depth": max_depth})
        if data is None:
            return AnalysisReport.for_category(EMPTY_REPORT_CATEGORY)
        return AnalysisReport.model_validate(data)

    async def _load_catalog(self) -> DomainCatalog:
        data = await self._get_json("catalog", "resource-catalog")
        if data is None:
            return DomainCatalog()
        return DomainCatalog.model_validate(data)

    async def _load_role_hierarchy_infos(self) -> List[RoleHierarchyInfo]:
        data = await self._get_json("role_hierarchy", "roles/hierarchy") or []
        return sort_role_hierarchy_infos(
            RoleHierarchyInfoPayload.model_validate(item).to_info() for item in data
        )

    async def _load_authorization_flow_diagram(self) -> str:
        response = await self._get("auth_flow_diagram", "diagrams/auth-flow")
        return response.text

    async def _load_role_hierarchy_diagram(self) -> str:
        response = await self._get("role_hierarchy_diagram", "diagrams/role-hierarchy")
        return response.text

    async def _get_json(self, resource: str, path: str, params: Optional[dict] = None) -> Any:
        response = await self._get(resource, path, params)
        if not response.content:
            return None
        return response.json()

    async def _get(self, resource: str, path: str, params: Optional[dict] = None) -> httpx.Response:
        url = f"{self.base_url}/{path}"
        start_time = time.time()

        response = await self._client.get(url, params=params)

        response_time = (time.time() - start_time) * 1000
        self._log.log_fetch(
            resource=resource,
            url=url,
            status_code=response.status_code,
            response_time=response_time
        )

        response.raise_for_status()
        return response

    async def close(self):
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @classmethod
    def from_config(cls, config: DataServiceConfig) -> "RemoteAuthorizationDataService":
        """Create a service with its own HTTP client from configuration."""
        if not config.api_url:
            logger.warning(
                "No api_url configured for the remote authorization data service; "
                f"requests to {config.base_url} will fail unless it is an absolute URL"
            )

        client = httpx.AsyncClient(
            base_url=config.api_url or "",
            timeout=httpx.Timeout(config.timeout_seconds)
        )
        return cls(client, config.base_url)
