"""Wire model for role hierarchy summaries."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from authviz.core.hierarchy import RoleHierarchyInfo
from authviz.core.roles import parse_role


class RoleHierarchyInfoPayload(BaseModel):
    """Role hierarchy summary with roles as ``namespace:name`` strings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role_string: str = Field(..., description="Role in namespace:name form")
    child_roles: List[str] = Field(default_factory=list, description="Roles this role inherits from")
    parent_roles: List[str] = Field(default_factory=list, description="Roles that inherit from this role")
    inherits_from_count: int = Field(default=0, description="Number of inherited roles")
    inherited_by_count: int = Field(default=0, description="Number of inheriting roles")
    hierarchy_depth: int = Field(default=0, description="Transitive inheritance depth")

    @classmethod
    def from_info(cls, info: RoleHierarchyInfo) -> "RoleHierarchyInfoPayload":
        return cls(
            role_string=info.role_string,
            child_roles=[str(role) for role in info.child_roles],
            parent_roles=[str(role) for role in info.parent_roles],
            inherits_from_count=info.inherits_from_count,
            inherited_by_count=info.inherited_by_count,
            hierarchy_depth=info.hierarchy_depth,
        )

    def to_info(self) -> RoleHierarchyInfo:
        """Rebuild the domain summary, parsing every role string."""
        return RoleHierarchyInfo(
            role=parse_role(self.role_string),
            child_roles=tuple(parse_role(value) for value in self.child_roles),
            parent_roles=tuple(parse_role(value) for value in self.parent_roles),
            inherits_from_count=self.inherits_from_count,
            inherited_by_count=self.inherited_by_count,
            hierarchy_depth=self.hierarchy_depth,
        )
