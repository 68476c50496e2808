"""Mermaid diagram sources for the authorization views."""

from authviz.core.registry import RoleRegistry

AUTHORIZATION_FLOW_DIAGRAM = """flowchart TD
    A[Request] --> B{Authenticated?}
    B -->|No| C[UnauthenticatedAccessException]
    B -->|Yes| D[Get User Roles]
    D --> E[Resolve Effective Roles<br/>via Inheritance]
    E --> F[Create Authorization Context]
    F --> G{Resource Validators?}
    G -->|Yes| H[Run Resource Validators]
    G -->|No| I{Policy Validators?}
    H --> I
    I -->|Yes| J[Run Policy Validators<br/>in Order]
    I -->|No| K{Any Protection?}
    J --> L{All Pass?}
    K -->|No| M[Unprotected Resource]
    K -->|Yes| L
    L -->|No| N[ForbiddenAccessException]
    L -->|Yes| O[Access Granted]
    M --> O
"""


def render_role_hierarchy_diagram(registry: RoleRegistry) -> str:
    """
    Render the role inheritance graph as a Mermaid flowchart.

    Each arrow points from a role to a role it inherits from. Roles are emitted
    in canonical string order so the output is stable.
    """
    roles = sorted(registry.get_registered_roles())
    node_ids = {role: f"R{index}" for index, role in enumerate(roles)}

    lines = ["flowchart TD"]
    for role in roles:
        lines.append(f'    {node_ids[role]}["{role}"]')

    for role in roles:
        for inherited in registry.get_inherited_roles(role):
            # Skip edges to roles the registry does not list
            inherited_id = node_ids.get(inherited)
            if inherited_id is None:
                continue
            lines.append(f"    {node_ids[role]} --> {inherited_id}")

    return "\n".join(lines) + "\n"
