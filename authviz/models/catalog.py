"""
Domain catalog models.

The catalog describes protected resources as a tree:
domain boundary -> resource kind -> resource.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CatalogResource(_CatalogModel):
    """A protected resource."""
    name: str = Field(..., description="Resource name")
    description: str = Field(default="", description="Resource description")
    roles: List[str] = Field(default_factory=list, description="Roles allowed to access the resource")


class ResourceKind(_CatalogModel):
    """A group of resources of the same kind."""
    name: str = Field(..., description="Resource kind name")
    description: str = Field(default="", description="Resource kind description")
    resources: List[CatalogResource] = Field(default_factory=list, description="Resources of this kind")


class DomainBoundary(_CatalogModel):
    """A domain boundary grouping resource kinds."""
    name: str = Field(..., description="Domain boundary name")
    description: str = Field(default="", description="Domain boundary description")
    resource_kinds: List[ResourceKind] = Field(default_factory=list, description="Resource kinds in the domain")


class DomainCatalog(_CatalogModel):
    """Snapshot of the domain catalog."""
    domains: List[DomainBoundary] = Field(default_factory=list, description="Domain boundaries")

    @property
    def is_empty(self) -> bool:
        return not self.domains

    @property
    def resource_count(self) -> int:
        return sum(
            len(kind.resources)
            for domain in self.domains
            for kind in domain.resource_kinds
        )
