"""Test fixtures for authorization analysis tests."""

from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from authviz.config import AuthvizConfig
from authviz.core.analysis import RoleHierarchyAnalyzer
from authviz.core.context import AnalysisContext
from authviz.core.registry import InMemoryRoleRegistry
from authviz.core.roles import (
    APP_ADMIN_ROLE,
    APP_AGENT_ROLE,
    APP_MANAGER_ROLE,
    APP_USER_ROLE,
    Role,
)
from authviz.main import create_app
from authviz.models.analysis import AnalysisOptions, AnalysisReport
from authviz.models.catalog import CatalogResource, DomainBoundary, DomainCatalog, ResourceKind
from authviz.services.local import LocalAuthorizationDataService

ROLE_A = Role("test", "a")
ROLE_B = Role("test", "b")


class CountingAnalyzerFactory:
    """Analyzer factory that records every analyzer it creates."""

    def __init__(self):
        self.options: List[AnalysisOptions] = []

    @property
    def calls(self) -> int:
        return len(self.options)

    def __call__(self, registry, options: AnalysisOptions) -> RoleHierarchyAnalyzer:
        self.options.append(options)
        return RoleHierarchyAnalyzer(registry, options)


@pytest.fixture
def simple_registry() -> InMemoryRoleRegistry:
    """Registry where B inherits from A."""
    registry = InMemoryRoleRegistry()
    registry.register_role(ROLE_A)
    registry.register_role(ROLE_B, [ROLE_A])
    return registry


@pytest.fixture
def application_registry() -> InMemoryRoleRegistry:
    """Registry mixing application roles with a custom namespace."""
    registry = InMemoryRoleRegistry()
    registry.register_role(APP_ADMIN_ROLE, [APP_MANAGER_ROLE])
    registry.register_role(APP_MANAGER_ROLE, [APP_AGENT_ROLE])
    registry.register_role(APP_AGENT_ROLE, [APP_USER_ROLE])
    registry.register_role(APP_USER_ROLE)
    registry.register_role(Role("sales", "manager"), [Role("sales", "rep"), APP_MANAGER_ROLE])
    registry.register_role(Role("sales", "rep"), [APP_USER_ROLE])
    return registry


@pytest.fixture
def sample_catalog() -> DomainCatalog:
    """A one-domain catalog."""
    return DomainCatalog(domains=[
        DomainBoundary(
            name="Sales",
            resource_kinds=[
                ResourceKind(
                    name="Order",
                    resources=[
                        CatalogResource(name="CreateOrder", roles=["sales:rep"]),
                        CatalogResource(name="ApproveOrder", roles=["sales:manager"]),
                    ]
                )
            ]
        )
    ])


@pytest.fixture
def counting_analyzer_factory() -> CountingAnalyzerFactory:
    return CountingAnalyzerFactory()


@pytest.fixture
def analysis_context(simple_registry, sample_catalog, counting_analyzer_factory) -> AnalysisContext:
    return AnalysisContext(
        registry=simple_registry,
        analyzer_factory=counting_analyzer_factory,
        catalog_provider=lambda: sample_catalog
    )


@pytest.fixture
def local_service(analysis_context) -> LocalAuthorizationDataService:
    return LocalAuthorizationDataService(analysis_context)


@pytest.fixture
def test_config() -> AuthvizConfig:
    return AuthvizConfig()


@pytest.fixture
def test_app(test_config, application_registry, sample_catalog):
    """Analysis API backed by the application registry."""
    return create_app(
        config=test_config,
        registry=application_registry,
        catalog_provider=lambda: sample_catalog
    )


@pytest.fixture
def test_client(test_app) -> TestClient:
    """Create a test client for the FastAPI app."""
    return TestClient(test_app)


@pytest.fixture
def mock_api() -> Callable[[Dict[str, dict]], httpx.AsyncClient]:
    """
    Build an AsyncClient answering from a path -> httpx.Response kwargs table.

    Every handled request is appended to ``client.requests``.
    """
    def _build(responses: Dict[str, dict]) -> httpx.AsyncClient:
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path in responses:
                return httpx.Response(**responses[request.url.path])
            return httpx.Response(404, json={"detail": "Not Found"})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
        client.requests = requests
        return client

    return _build


def report_json(category: str = "Authorization", **kwargs) -> dict:
    """Serialize a report the way the API does."""
    return AnalysisReport(category=category, **kwargs).model_dump(mode="json", by_alias=True)
