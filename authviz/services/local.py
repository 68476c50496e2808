"""
Local authorization data service.

Computes analysis data in-process from the role registry held by an
:class:`AnalysisContext`.
"""

from typing import List

from authviz.core.context import AnalysisContext
from authviz.core.diagrams import AUTHORIZATION_FLOW_DIAGRAM, render_role_hierarchy_diagram
from authviz.core.hierarchy import RoleHierarchyInfo, build_role_hierarchy_infos
from authviz.models.analysis import AnalysisOptions, AnalysisReport
from authviz.models.catalog import DomainCatalog
from authviz.services.base import AuthorizationDataService, DataSource


class LocalAuthorizationDataService(AuthorizationDataService):
    """Authorization data service that runs the analyzer in-process."""

    source = DataSource.LOCAL

    def __init__(self, context: AnalysisContext, include_info_issues: bool = True):
        super().__init__()
        self.context = context
        self.include_info_issues = include_info_issues

    @property
    def is_available(self) -> bool:
        return True

    async def _load_report(self, max_depth: int) -> AnalysisReport:
        options = AnalysisOptions(
            max_hierarchy_depth=max_depth,
            include_info_issues=self.include_info_issues,
            excluded_categories=(),
        )
        analyzer = self.context.analyzer_factory(self.context.registry, options)
        return await analyzer.analyze_all()

    async def _load_catalog(self) -> DomainCatalog:
        return self.context.catalog_provider()

    async def _load_role_hierarchy_infos(self) -> List[RoleHierarchyInfo]:
        return build_role_hierarchy_infos(self.context.registry)

    async def _load_authorization_flow_diagram(self) -> str:
        return AUTHORIZATION_FLOW_DIAGRAM

    async def _load_role_hierarchy_diagram(self) -> str:
        return render_role_hierarchy_diagram(self.context.registry)
