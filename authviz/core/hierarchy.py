"""
Role hierarchy analysis.

Computes the transitive inheritance depth of roles and assembles the ordered
per-role summaries shown by the hierarchy views.
"""

from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from authviz.core.registry import RoleRegistry
from authviz.core.roles import Role


@dataclass(frozen=True)
class RoleHierarchyInfo:
    """Hierarchy summary for a single role."""
    role: Role
    child_roles: Tuple[Role, ...]  # Roles this role inherits from
    parent_roles: Tuple[Role, ...]  # Roles that inherit from this role
    inherits_from_count: int
    inherited_by_count: int
    hierarchy_depth: int

    @property
    def role_string(self) -> str:
        """The role as a string for display and filtering."""
        return str(self.role)

    @classmethod
    def empty(cls, role: Role) -> "RoleHierarchyInfo":
        """Summary for a role with no known relationships."""
        return cls(role, (), (), 0, 0, 0)


def calculate_hierarchy_depth(role: Role, registry: RoleRegistry) -> int:
    """
    Calculate how many inheritance levels lie below a role.

    A role that inherits from nothing has depth 0; otherwise its depth is one
    more than the deepest role it inherits from. A role met again on the current
    path (an inheritance cycle) counts as depth 0, so cyclic graphs terminate
    but report a shallower depth than they would unrolled.

    The walk keeps its own stack, so chain length is not bound by the
    interpreter's recursion limit.

    Args:
        role: Role to measure; it does not have to be registered
        registry: Source of direct inheritance relationships

    Returns:
        Non-negative depth in edges
    """
    inherited_roles = registry.get_inherited_roles(role)
    if not inherited_roles:
        return 0

    path: Set[Role] = {role}
    # Frames of [role, remaining inherited roles, deepest inherited depth so far]
    stack: List[list] = [[role, iter(inherited_roles), 0]]

    while True:
        frame = stack[-1]
        inherited = next(frame[1], None)

        if inherited is None:
            stack.pop()
            path.discard(frame[0])
            depth = 1 + frame[2]
            if not stack:
                return depth
            stack[-1][2] = max(stack[-1][2], depth)
            continue

        if inherited in path:
            continue

        next_roles = registry.get_inherited_roles(inherited)
        if next_roles:
            path.add(inherited)
            stack.append([inherited, iter(next_roles), 0])


def sort_role_hierarchy_infos(infos: Iterable[RoleHierarchyInfo]) -> List[RoleHierarchyInfo]:
    """Order summaries by hierarchy depth, then by role string."""
    return sorted(infos, key=lambda info: (info.hierarchy_depth, info.role_string))


def build_role_hierarchy_infos(registry: RoleRegistry) -> List[RoleHierarchyInfo]:
    """
    Build a hierarchy summary for every registered role.

    Returns:
        Summaries ordered by hierarchy depth, then by role string
    """
    result = []

    for role in registry.get_registered_roles():
        child_roles = tuple(registry.get_inherited_roles(role))
        parent_roles = tuple(registry.get_inheriting_roles(role))

        result.append(RoleHierarchyInfo(
            role=role,
            child_roles=child_roles,
            parent_roles=parent_roles,
            inherits_from_count=len(child_roles),
            inherited_by_count=len(parent_roles),
            hierarchy_depth=calculate_hierarchy_depth(role, registry),
        ))

    return sort_role_hierarchy_infos(result)
