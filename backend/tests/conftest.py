"""
Shared pytest fixtures and configuration for the ShareLink test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Shared fixtures for the token authority, registry and object store
- A Flask application wired to an in-memory object store
"""

import pytest
from hypothesis import HealthCheck, settings

from app_factory import AppConfig, create_app
from sharelink.application.file_share_service import FileShareService
from sharelink.config.s3_config import S3Config
from sharelink.domain.file_storage import TokenAuthority
from sharelink.infrastructure.in_memory_file_registry import InMemoryFileRegistry
from tests.fixtures.mock_repositories import MockObjectStore

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")

TEST_SECRET = "sekret"
TEST_BUCKET = "test-bucket"


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def secret() -> str:
    """Provide the shared token secret used across tests."""
    return TEST_SECRET


@pytest.fixture
def bucket_name() -> str:
    return TEST_BUCKET


@pytest.fixture
def token_authority(secret) -> TokenAuthority:
    return TokenAuthority(secret)


@pytest.fixture
def registry() -> InMemoryFileRegistry:
    return InMemoryFileRegistry()


@pytest.fixture
def object_store(bucket_name) -> MockObjectStore:
    """Provide an in-memory object store with the test bucket created."""
    return MockObjectStore(buckets={bucket_name})


@pytest.fixture
def file_share_service(object_store, registry, token_authority, bucket_name):
    return FileShareService(object_store, registry, token_authority, bucket_name)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def s3_config(monkeypatch, secret, bucket_name) -> S3Config:
    """Provide S3 configuration built from a controlled environment."""
    for name in ("ENDPOINT", "REGION", "PUBLIC_OBJECT_URL_PREFIX", "BUCKER_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BUCKET_NAME", bucket_name)
    monkeypatch.setenv("SECRET_TOKEN", secret)
    monkeypatch.setenv("S3_AUTO_CREATE_BUCKET", "false")
    return S3Config()


@pytest.fixture
def app(s3_config, object_store):
    """Create a Flask app wired to the in-memory object store."""
    flask_app = create_app(AppConfig(s3=s3_config), object_store=object_store)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (application wiring, concurrency)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full workflows)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/e2e/* -> @pytest.mark.e2e
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path or "\\e2e\\" in test_path:
            item.add_marker(pytest.mark.e2e)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
