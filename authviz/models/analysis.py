"""
Analysis models for the authorization analysis service.

This module defines the analysis report produced by an analyzer, its issues,
and the summary projected from a report. JSON uses camelCase keys.
"""

from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IssueSeverity(str, Enum):
    """Analysis issue severities."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class AnalysisOptions(BaseModel):
    """Options handed to an analyzer run."""
    model_config = ConfigDict(frozen=True)

    max_hierarchy_depth: int = Field(default=5, description="Deepest acceptable role hierarchy")
    include_info_issues: bool = Field(default=True, description="Whether informational issues are reported")
    excluded_categories: Tuple[str, ...] = Field(default=(), description="Issue categories to skip")


class AnalysisIssue(BaseModel):
    """A single finding about the authorization model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    category: str = Field(..., description="Category of the analyzer that raised the issue")
    severity: IssueSeverity = Field(..., description="Issue severity")
    title: str = Field(..., description="Short issue title")
    description: str = Field(default="", description="Detailed description")
    affected_objects: List[str] = Field(default_factory=list, description="Roles or resources involved")
    recommendation: str = Field(default="", description="Suggested remediation")


class AnalysisSummary(BaseModel):
    """Counts derived from an analysis report."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    category: str = Field(..., description="Report category")
    total_issues: int = Field(default=0, description="Total number of issues")
    error_count: int = Field(default=0, description="Number of error issues")
    warning_count: int = Field(default=0, description="Number of warning issues")
    info_count: int = Field(default=0, description="Number of informational issues")
    issues_by_category: Dict[str, int] = Field(default_factory=dict, description="Issue count per category")
    metrics: Dict[str, int] = Field(default_factory=dict, description="Metrics copied from the report")
    passed: bool = Field(default=True, description="True when the report has no errors")


class AnalysisReport(BaseModel):
    """Result of analyzing the authorization model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    category: str = Field(..., description="Report category")
    issues: List[AnalysisIssue] = Field(default_factory=list, description="Issues found")
    metrics: Dict[str, int] = Field(default_factory=dict, description="Named statistics")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Report creation timestamp"
    )

    @classmethod
    def for_category(cls, category: str) -> "AnalysisReport":
        """Create an empty report for a category."""
        return cls(category=category)

    def get_summary(self) -> AnalysisSummary:
        """Project the report into its summary."""
        severities = Counter(issue.severity for issue in self.issues)
        categories = Counter(issue.category for issue in self.issues)

        return AnalysisSummary(
            category=self.category,
            total_issues=len(self.issues),
            error_count=severities[IssueSeverity.ERROR],
            warning_count=severities[IssueSeverity.WARNING],
            info_count=severities[IssueSeverity.INFO],
            issues_by_category=dict(categories),
            metrics=dict(self.metrics),
            passed=severities[IssueSeverity.ERROR] == 0,
        )
