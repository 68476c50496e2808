"""Exception types raised by the authorization analysis service."""

from typing import Optional


class AuthvizError(Exception):
    """Base exception for authorization analysis errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RoleFormatError(AuthvizError, ValueError):
    """A role string is not in the ``namespace:name`` form."""

    def __init__(self, role_string: str):
        super().__init__(
            f"Invalid role format: '{role_string}'. Expected format: 'namespace:name'"
        )
        self.role_string = role_string


class UnknownApplicationRoleError(AuthvizError, LookupError):
    """An application-namespaced role name is not one of the predefined roles."""

    def __init__(self, role_string: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown application role: '{role_string}'")
        self.role_string = role_string


class ConfigurationError(AuthvizError):
    """No usable authorization data service is registered."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No authorization data service is available. "
            "Register either a local or a remote authorization data service."
        )
