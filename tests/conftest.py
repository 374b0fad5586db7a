"""
Global test fixtures for redcrumbs.

This module provides shared fixtures for all tests including:
- Mock Redis (fakeredis)
- Isolated settings and registries
- Sample creator / target entities
"""

import pytest

from redcrumbs.config import Settings, reset_settings
from redcrumbs.database.adapters import AdapterRegistry, adapters
from redcrumbs.models.registry import CrumbClassRegistry


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Remove REDCRUMBS_* variables and reset process-wide state around each test.
    """
    import os

    for name in list(os.environ):
        if name.startswith("REDCRUMBS_"):
            monkeypatch.delenv(name)

    reset_settings()
    adapters.clear()
    yield
    reset_settings()
    adapters.clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def adapter_registry() -> AdapterRegistry:
    """Empty adapter registry."""
    return AdapterRegistry()


@pytest.fixture
def class_registry() -> CrumbClassRegistry:
    """Empty crumb class registry."""
    return CrumbClassRegistry()


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest.fixture
def mock_redis():
    """
    Create a mock Redis client using fakeredis.
    """
    try:
        import fakeredis
        redis_client = fakeredis.FakeRedis(decode_responses=True)
        yield redis_client
        redis_client.flushall()
        redis_client.close()
    except ImportError:
        pytest.skip("fakeredis not installed")


# =============================================================================
# Entity Fixtures
# =============================================================================

class User:
    """Plain object standing in for an application model."""

    def __init__(self, **attributes):
        for name, value in attributes.items():
            setattr(self, name, value)


@pytest.fixture
def creator() -> User:
    return User(id=42, name="Jon", email="jon@example.com", role="admin")


@pytest.fixture
def target() -> dict:
    """Targets may also be plain mappings."""
    return {"id": "507f1f77bcf86cd799439011", "name": "Dany", "email": "dany@example.com"}
