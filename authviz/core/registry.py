"""
Role registry: the registered roles and their direct inheritance edges.

A role *inherits from* its child roles (it gains what they grant) and is
*inherited by* its parent roles. The registry only answers direct relationships;
transitive questions are handled by :mod:`authviz.core.hierarchy`.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from authviz.core.roles import Role, parse_role

logger = logging.getLogger(__name__)


@runtime_checkable
class RoleRegistry(Protocol):
    """Read-only view of registered roles and their direct inheritance."""

    def get_registered_roles(self) -> List[Role]:
        """Return every registered role."""
        ...

    def get_inherited_roles(self, role: Role) -> List[Role]:
        """Return the roles that ``role`` directly inherits from."""
        ...

    def get_inheriting_roles(self, role: Role) -> List[Role]:
        """Return the roles that directly inherit from ``role``."""
        ...


class InMemoryRoleRegistry:
    """Role registry backed by in-process dictionaries."""

    def __init__(self):
        # Dicts keyed by role keep registration order and act as ordered sets.
        self._inherits: Dict[Role, Dict[Role, None]] = {}
        self._inherited_by: Dict[Role, Dict[Role, None]] = {}

    def register_role(self, role: Role, inherits: Optional[Iterable[Role]] = None) -> Role:
        """
        Register a role, optionally with the roles it inherits from.

        Roles named in ``inherits`` are registered too if they are not yet known.
        Registering an existing role again only adds the new edges.
        """
        self._ensure(role)
        for inherited in inherits or ():
            self.add_inheritance(role, inherited)
        return role

    def add_inheritance(self, role: Role, inherited: Role) -> None:
        """Record that ``role`` directly inherits from ``inherited``."""
        self._ensure(role)
        self._ensure(inherited)
        self._inherits[role][inherited] = None
        self._inherited_by[inherited][role] = None
        logger.debug(f"Role {role} inherits from {inherited}")

    def get_registered_roles(self) -> List[Role]:
        return list(self._inherits)

    def get_inherited_roles(self, role: Role) -> List[Role]:
        return list(self._inherits.get(role, ()))

    def get_inheriting_roles(self, role: Role) -> List[Role]:
        return list(self._inherited_by.get(role, ()))

    def __contains__(self, role: object) -> bool:
        return role in self._inherits

    def __len__(self) -> int:
        return len(self._inherits)

    def _ensure(self, role: Role) -> None:
        if role not in self._inherits:
            self._inherits[role] = {}
            self._inherited_by[role] = {}

    @classmethod
    def from_config(cls, roles_config: Dict[str, Any]) -> "InMemoryRoleRegistry":
        """
        Build a registry from the ``roles.yaml`` structure.

        Args:
            roles_config: Mapping with a ``roles`` list; each entry has a ``role``
                string and an optional ``inherits`` list of role strings.

        Returns:
            Populated registry

        Example:
            {"roles": [{"role": "app:manager", "inherits": ["app:agent"]}]}
        """
        registry = cls()
        for entry in roles_config.get("roles") or []:
            role = parse_role(entry["role"])
            inherits = [parse_role(value) for value in entry.get("inherits") or []]
            registry.register_role(role, inherits)

        logger.info(f"Loaded role registry with {len(registry)} roles")
        return registry
