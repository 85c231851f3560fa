"""Pytest configuration and fixtures."""

import os

import pytest
from prometheus_client import CollectorRegistry

from a2ui_engine.catalog import CatalogRegistry
from a2ui_engine.core import Limits, create_container, get_settings
from a2ui_engine.monitoring import MetricsCollector
from a2ui_engine.pipeline import StreamProcessor
from a2ui_engine.protocol import EnvelopeValidator
from a2ui_engine.surface import Surface


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["A2UI_LOG_LEVEL"] = "DEBUG"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def di_container(metrics):
    """Dependency injection container for testing."""
    return create_container(metrics=metrics)


@pytest.fixture
def registry():
    """Catalog registry fixture."""
    return CatalogRegistry()


@pytest.fixture
def limits():
    """Default resource limits."""
    return Limits()


@pytest.fixture
def validator(registry, limits):
    """Envelope validator with default limits."""
    return EnvelopeValidator(registry, limits)


@pytest.fixture
def metrics():
    """Metrics collector bound to a private Prometheus registry."""
    return MetricsCollector(registry=CollectorRegistry())


# ============================================================================
# Surface Fixtures
# ============================================================================

@pytest.fixture
def surface(registry):
    """Surface named "main"."""
    return Surface("main", registry)


@pytest.fixture
def processor(surface, validator, metrics):
    """Stream processor driving the "main" surface."""
    return StreamProcessor(surface, validator, metrics, idle_timeout=1.0)


@pytest.fixture
def create_main():
    """createSurface message for "main"."""
    return {"createSurface": {"surfaceId": "main", "catalogId": "common-origin.design-system:v2.4"}}
