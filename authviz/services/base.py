"""
Authorization data service contract.

Presentation code reads authorization data through this contract without
knowing whether it is computed in-process or fetched from an API. Every result
is cached per service instance until :meth:`AuthorizationDataService.refresh`.
"""

import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Tuple

from authviz.config.logging import StructuredLogger
from authviz.core.hierarchy import RoleHierarchyInfo
from authviz.core.roles import Role
from authviz.models.analysis import AnalysisReport, AnalysisSummary
from authviz.models.catalog import DomainCatalog


class DataSource(str, Enum):
    """Where authorization data comes from."""
    LOCAL = "local"
    REMOTE = "remote"
    UNKNOWN = "unknown"


class AuthorizationDataService(ABC):
    """Base class for authorization data services."""

    source: DataSource = DataSource.UNKNOWN

    def __init__(self):
        self._log = StructuredLogger(type(self).__module__)
        self._clear_caches()

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the service can currently provide data."""

    async def get_analysis_report(self, max_depth: int) -> AnalysisReport:
        """
        Get the analysis report, running a refresh when none is cached.

        Args:
            max_depth: Deepest acceptable role hierarchy, passed to the analyzer
        """
        if self._cached_report is None:
            await self.refresh(max_depth)
        return self._cached_report

    async def get_analysis_summary(self, max_depth: int) -> AnalysisSummary:
        """Get the summary of the current analysis report."""
        report = await self.get_analysis_report(max_depth)
        return report.get_summary()

    async def get_catalog(self) -> DomainCatalog:
        """Get the domain catalog (domain boundary -> resource kind -> resource)."""
        if self._cached_catalog is None:
            self._cached_catalog = await self._load_catalog()
        return self._cached_catalog

    async def get_all_role_hierarchy_info(self) -> List[RoleHierarchyInfo]:
        """Get hierarchy summaries for all roles, ordered by depth then role string."""
        if self._cached_hierarchy is None:
            self._cached_hierarchy = tuple(await self._load_role_hierarchy_infos())
        return list(self._cached_hierarchy)

    async def get_role_hierarchy_info(self, role: Role) -> RoleHierarchyInfo:
        """Get the hierarchy summary of one role; unknown roles get an empty summary."""
        for info in await self.get_all_role_hierarchy_info():
            if info.role == role:
                return info
        return RoleHierarchyInfo.empty(role)

    async def get_roles(self) -> List[Role]:
        """Get all roles known to the hierarchy."""
        return [info.role for info in await self.get_all_role_hierarchy_info()]

    async def get_authorization_flow_diagram(self) -> str:
        """Get the Mermaid definition of the authorization flow."""
        if self._cached_auth_flow_diagram is None:
            self._cached_auth_flow_diagram = await self._load_authorization_flow_diagram()
        return self._cached_auth_flow_diagram

    async def get_role_hierarchy_diagram(self) -> str:
        """Get the Mermaid definition of the role hierarchy."""
        if self._cached_role_hierarchy_diagram is None:
            self._cached_role_hierarchy_diagram = await self._load_role_hierarchy_diagram()
        return self._cached_role_hierarchy_diagram

    async def refresh(self, max_depth: int) -> None:
        """
        Clear all cached data and reload the analysis report.

        Other data is reloaded lazily on next access.
        """
        self._clear_caches()

        start_time = time.time()
        self._cached_report = await self._load_report(max_depth)
        duration = (time.time() - start_time) * 1000

        self._log.log_refresh(
            source=self.source.value,
            max_depth=max_depth,
            duration=duration,
            issue_count=len(self._cached_report.issues)
        )

    def _clear_caches(self) -> None:
        self._cached_report: Optional[AnalysisReport] = None
        self._cached_catalog: Optional[DomainCatalog] = None
        self._cached_hierarchy: Optional[Tuple[RoleHierarchyInfo, ...]] = None
        self._cached_auth_flow_diagram: Optional[str] = None
        self._cached_role_hierarchy_diagram: Optional[str] = None

    @abstractmethod
    async def _load_report(self, max_depth: int) -> AnalysisReport:
        ...

    @abstractmethod
    async def _load_catalog(self) -> DomainCatalog:
        ...

    @abstractmethod
    async def _load_role_hierarchy_infos(self) -> List[RoleHierarchyInfo]:
        ...

    @abstractmethod
    async def _load_authorization_flow_diagram(self) -> str:
        ...

    @abstractmethod
    async def _load_role_hierarchy_diagram(self) -> str:
        ...
