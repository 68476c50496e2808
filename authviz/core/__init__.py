"""
Core role model and hierarchy analysis.

Exposes roles and their parsing, the role registry, hierarchy depth and
summary building, and the exceptions raised by the service.
"""

from .exceptions import (
    AuthvizError,
    ConfigurationError,
    RoleFormatError,
    UnknownApplicationRoleError,
)
from .hierarchy import (
    RoleHierarchyInfo,
    build_role_hierarchy_infos,
    calculate_hierarchy_depth,
)
from .registry import InMemoryRoleRegistry, RoleRegistry
from .roles import (
    APP_NAMESPACE,
    APPLICATION_ROLES,
    ApplicationRole,
    Role,
    get_application_role,
    parse_role,
)

__all__ = [
    "APP_NAMESPACE",
    "APPLICATION_ROLES",
    "ApplicationRole",
    "AuthvizError",
    "ConfigurationError",
    "InMemoryRoleRegistry",
    "Role",
    "RoleFormatError",
    "RoleHierarchyInfo",
    "RoleRegistry",
    "UnknownApplicationRoleError",
    "build_role_hierarchy_infos",
    "calculate_hierarchy_depth",
    "get_application_role",
    "parse_role",
]
