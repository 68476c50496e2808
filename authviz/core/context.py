"""
Analysis context handed to the local data service.

Bundles the role registry with the analyzer factory and the catalog source, so
cache lifetimes stay with the service that owns the context.
"""

from dataclasses import dataclass, field
from typing import Callable

from authviz.core.analysis import AnalyzerFactory, RoleHierarchyAnalyzer
from authviz.core.registry import RoleRegistry
from authviz.models.catalog import DomainCatalog


@dataclass
class AnalysisContext:
    """Collaborators used to compute authorization data in-process."""
    registry: RoleRegistry
    analyzer_factory: AnalyzerFactory = RoleHierarchyAnalyzer
    catalog_provider: Callable[[], DomainCatalog] = field(default=DomainCatalog)
