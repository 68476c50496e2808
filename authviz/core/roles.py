"""
Role values and the predefined application roles.

A role is identified by ``(namespace, name)`` and rendered canonically as
``namespace:name``. Roles in the reserved ``app`` namespace form a closed set
of singletons that are looked up, never constructed.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Dict

from authviz.core.exceptions import RoleFormatError, UnknownApplicationRoleError

APP_NAMESPACE = "app"


@total_ordering
@dataclass(frozen=True, eq=False)
class Role:
    """Immutable role identified by namespace and name."""
    namespace: str
    name: str

    def __post_init__(self):
        if not self.namespace or not self.name or ":" in self.namespace:
            raise RoleFormatError(f"{self.namespace}:{self.name}")
        if self.namespace.lower() == APP_NAMESPACE:
            raise UnknownApplicationRoleError(
                str(self),
                f"Application role '{self}' cannot be constructed directly; "
                "use get_application_role() instead",
            )

    @classmethod
    def _application(cls, name: str) -> "Role":
        role = object.__new__(cls)
        object.__setattr__(role, "namespace", APP_NAMESPACE)
        object.__setattr__(role, "name", name)
        return role

    @property
    def is_application_role(self) -> bool:
        return self.namespace == APP_NAMESPACE

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return str(self) == str(other)

    def __lt__(self, other: "Role") -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return str(self) < str(other)

    def __hash__(self) -> int:
        return hash(str(self))


class ApplicationRole(str, Enum):
    """Predefined application roles."""
    USER = "user"
    INTERNAL = "internal"
    AGENT = "agent"
    MANAGER = "manager"
    ADMIN = "admin"
    SYSTEM = "system"


# Exhaustive: one singleton per enum member.
APPLICATION_ROLES: Dict[ApplicationRole, Role] = {
    member: Role._application(member.value) for member in ApplicationRole
}

APP_USER_ROLE = APPLICATION_ROLES[ApplicationRole.USER]
APP_INTERNAL_ROLE = APPLICATION_ROLES[ApplicationRole.INTERNAL]
APP_AGENT_ROLE = APPLICATION_ROLES[ApplicationRole.AGENT]
APP_MANAGER_ROLE = APPLICATION_ROLES[ApplicationRole.MANAGER]
APP_ADMIN_ROLE = APPLICATION_ROLES[ApplicationRole.ADMIN]
APP_SYSTEM_ROLE = APPLICATION_ROLES[ApplicationRole.SYSTEM]


def get_application_role(name: str) -> Role:
    """
    Look up a predefined application role by name (case-insensitive).

    Raises:
        UnknownApplicationRoleError: If the name is not a predefined application role.
    """
    try:
        member = ApplicationRole(name.lower())
    except ValueError:
        raise UnknownApplicationRoleError(f"{APP_NAMESPACE}:{name}") from None
    return APPLICATION_ROLES[member]


def parse_role(role_string: str) -> Role:
    """
    Parse a ``namespace:name`` string into a Role.

    Application roles resolve to their predefined singletons.

    Args:
        role_string: Role in canonical string form

    Returns:
        The parsed role

    Raises:
        RoleFormatError: If the colon is missing, leading or trailing.
        UnknownApplicationRoleError: If an ``app`` role name is not predefined.

    Examples:
        "sales:manager" -> Role("sales", "manager")
        "app:admin" -> APP_ADMIN_ROLE
    """
    colon_index = role_string.find(":")
    if colon_index <= 0 or colon_index >= len(role_string) - 1:
        raise RoleFormatError(role_string)

    namespace = role_string[:colon_index]
    name = role_string[colon_index + 1:]

    if namespace.lower() == APP_NAMESPACE:
        try:
            return get_application_role(name)
        except UnknownApplicationRoleError:
            raise UnknownApplicationRoleError(role_string) from None

    return Role(namespace, name)
