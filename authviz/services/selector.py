"""
Selection of the authorization data service.

Resolves the local or remote implementation by data source, falling back to
whichever registered service is available.
"""

import logging
from typing import Iterator, Optional, Tuple, Union

from authviz.config import AuthvizConfig
from authviz.core.context import AnalysisContext
from authviz.core.exceptions import ConfigurationError
from authviz.services.base import AuthorizationDataService, DataSource
from authviz.services.local import LocalAuthorizationDataService
from authviz.services.remote import RemoteAuthorizationDataService

logger = logging.getLogger(__name__)


class DataServiceSelector:
    """Resolves authorization data services by source."""

    def __init__(
        self,
        local: Optional[LocalAuthorizationDataService] = None,
        remote: Optional[RemoteAuthorizationDataService] = None
    ):
        self.local = local
        self.remote = remote

    def get_service(self, source: Union[DataSource, str]) -> AuthorizationDataService:
        """
        Get the authorization data service for a source.

        Args:
            source: Requested data source; unknown values use the default service

        Returns:
            The matching service

        Raises:
            ConfigurationError: If the requested service is not registered
        """
        source = self._coerce_source(source)

        if source == DataSource.LOCAL:
            if self.local is None:
                raise ConfigurationError("Local authorization data service is not registered.")
            return self.local

        if source == DataSource.REMOTE:
            if self.remote is None:
                raise ConfigurationError("Remote authorization data service is not registered.")
            return self.remote

        return self.get_default_service()

    def get_default_service(self) -> AuthorizationDataService:
        """
        Get the default service: local if available, otherwise remote.

        Falls back to the local service even when it is unavailable.

        Raises:
            ConfigurationError: If no service is registered at all
        """
        if self.local is not None and self.local.is_available:
            return self.local

        if self.remote is not None and self.remote.is_available:
            return self.remote

        if self.local is not None:
            logger.warning("No authorization data service is available; using the local service")
            return self.local

        raise ConfigurationError()

    def try_get_service(
        self, source: Union[DataSource, str]
    ) -> Tuple[bool, Optional[AuthorizationDataService]]:
        """
        Resolve a service without raising.

        Returns:
            ``(True, service)`` when an available service was resolved,
            otherwise ``(False, None)``
        """
        try:
            service = self.get_service(source)
        except Exception as e:
            logger.debug(f"Could not resolve authorization data service for {source}: {e}")
            return False, None

        if not service.is_available:
            return False, None
        return True, service

    def get_available_services(self) -> Iterator[AuthorizationDataService]:
        """Yield every registered service that is available, local first."""
        if self.local is not None and self.local.is_available:
            yield self.local

        if self.remote is not None and self.remote.is_available:
            yield self.remote

    @staticmethod
    def _coerce_source(source: Union[DataSource, str]) -> DataSource:
        try:
            return DataSource(source)
        except ValueError:
            return DataSource.UNKNOWN

    @classmethod
    def from_config(
        cls,
        config: AuthvizConfig,
        context: AnalysisContext,
        remote: Optional[RemoteAuthorizationDataService] = None
    ) -> "DataServiceSelector":
        """
        Build a selector from configuration.

        Args:
            config: Application configuration
            context: Analysis context for the local service
            remote: Prebuilt remote service; created from configuration when omitted
        """
        settings = config.data_service

        local = None
        if settings.local_enabled:
            local = LocalAuthorizationDataService(
                context, include_info_issues=config.analysis.include_info_issues
            )

        if settings.remote_enabled and remote is None:
            remote = RemoteAuthorizationDataService.from_config(settings)
        elif not settings.remote_enabled:
            remote = None

        return cls(local=local, remote=remote)
