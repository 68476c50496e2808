"""
Role hierarchy analyzer.

Analyzers inspect a role registry and produce an :class:`AnalysisReport`. The
data services only cache and forward reports; the default analyzer shipped here
checks inheritance cycles, excessive depth and isolated roles.
"""

import logging
from typing import Callable, List, Protocol, Set

from authviz.core.hierarchy import calculate_hierarchy_depth
from authviz.core.registry import RoleRegistry
from authviz.core.roles import Role
from authviz.models.analysis import (
    AnalysisIssue,
    AnalysisOptions,
    AnalysisReport,
    IssueSeverity,
)

logger = logging.getLogger(__name__)

REPORT_CATEGORY = "Authorization"
HIERARCHY_CATEGORY = "RoleHierarchy"


class Analyzer(Protocol):
    """Produces an analysis report for the authorization model."""

    async def analyze_all(self) -> AnalysisReport:
        ...


AnalyzerFactory = Callable[[RoleRegistry, AnalysisOptions], Analyzer]


class RoleHierarchyAnalyzer:
    """Analyzer for the role inheritance graph."""

    def __init__(self, registry: RoleRegistry, options: AnalysisOptions):
        self.registry = registry
        self.options = options

    async def analyze_all(self) -> AnalysisReport:
        roles = self.registry.get_registered_roles()
        issues: List[AnalysisIssue] = []

        if HIERARCHY_CATEGORY not in self.options.excluded_categories:
            issues.extend(self._check_cycles(roles))
            issues.extend(self._check_depth(roles))
            if self.options.include_info_issues:
                issues.extend(self._check_isolated(roles))

        depths = [calculate_hierarchy_depth(role, self.registry) for role in roles]
        metrics = {
            "total_roles": len(roles),
            "application_roles": sum(1 for role in roles if role.is_application_role),
            "inheritance_edges": sum(len(self.registry.get_inherited_roles(role)) for role in roles),
            "max_hierarchy_depth": max(depths, default=0),
        }

        logger.info(
            "Role hierarchy analysis completed",
            extra={"total_roles": len(roles), "issue_count": len(issues)}
        )
        return AnalysisReport(category=REPORT_CATEGORY, issues=issues, metrics=metrics)

    def _check_cycles(self, roles: List[Role]) -> List[AnalysisIssue]:
        issues = []
        for role in roles:
            if self._reaches(role, role):
                issues.append(AnalysisIssue(
                    category=HIERARCHY_CATEGORY,
                    severity=IssueSeverity.ERROR,
                    title="Circular role inheritance",
                    description=f"Role '{role}' inherits from itself through its inherited roles.",
                    affected_objects=[str(role)],
                    recommendation="Remove one of the inheritance links forming the cycle.",
                ))
        return issues

    def _check_depth(self, roles: List[Role]) -> List[AnalysisIssue]:
        issues = []
        max_depth = self.options.max_hierarchy_depth
        for role in roles:
            depth = calculate_hierarchy_depth(role, self.registry)
            if depth > max_depth:
                issues.append(AnalysisIssue(
                    category=HIERARCHY_CATEGORY,
                    severity=IssueSeverity.WARNING,
                    title="Role hierarchy too deep",
                    description=f"Role '{role}' has hierarchy depth {depth}, above the maximum of {max_depth}.",
                    affected_objects=[str(role)],
                    recommendation="Flatten the hierarchy or raise the maximum depth.",
                ))
        return issues

    def _check_isolated(self, roles: List[Role]) -> List[AnalysisIssue]:
        issues = []
        for role in roles:
            if not self.registry.get_inherited_roles(role) and not self.registry.get_inheriting_roles(role):
                issues.append(AnalysisIssue(
                    category=HIERARCHY_CATEGORY,
                    severity=IssueSeverity.INFO,
                    title="Isolated role",
                    description=f"Role '{role}' neither inherits from nor is inherited by another role.",
                    affected_objects=[str(role)],
                ))
        return issues

    def _reaches(self, start: Role, target: Role) -> bool:
        seen: Set[Role] = set()
        stack = list(self.registry.get_inherited_roles(start))
        while stack:
            current = stack.pop()
            if current == target:
                return True
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.registry.get_inherited_roles(current))
        return False
