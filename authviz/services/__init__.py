"""
Authorization data services.

This package contains the data service contract, its local and remote
implementations, and the selector that chooses between them.
"""

from .base import AuthorizationDataService, DataSource
from .local import LocalAuthorizationDataService
from .remote import RemoteAuthorizationDataService
from .selector import DataServiceSelector

__all__ = [
    "AuthorizationDataService",
    "DataSource",
    "LocalAuthorizationDataService",
    "RemoteAuthorizationDataService",
    "DataServiceSelector",
]
