"""Configuration tests."""

import pytest

from a2ui_engine.core import Limits, get_settings
from a2ui_engine.core.config import Settings


@pytest.mark.unit
def test_settings_defaults():
    """Test default limits load correctly."""
    settings = Settings()

    assert settings.max_components == 100
    assert settings.max_children == 50
    assert settings.max_data_model_bytes == 51200
    assert settings.max_tree_depth == 10
    assert settings.max_value_depth == 32
    assert settings.idle_timeout == 30.0
    assert settings.require_create is False
    assert settings.catalog_id == "common-origin.design-system:v2.4"


@pytest.mark.unit
def test_settings_from_environment(monkeypatch):
    """Test A2UI_ prefixed environment variables override defaults."""
    monkeypatch.setenv("A2UI_MAX_COMPONENTS", "5")
    monkeypatch.setenv("A2UI_IDLE_TIMEOUT", "2.5")
    monkeypatch.setenv("A2UI_REQUIRE_CREATE", "true")

    settings = Settings()
    assert settings.max_components == 5
    assert settings.idle_timeout == 2.5
    assert settings.require_create is True


@pytest.mark.unit
def test_settings_validation():
    """Test limits must be positive."""
    with pytest.raises(Exception):
        Settings(max_components=0)

    with pytest.raises(Exception):
        Settings(idle_timeout=-1)


@pytest.mark.unit
def test_limits_snapshot():
    """Test settings produce an immutable limits value."""
    limits = Settings(max_children=7, max_tree_depth=3).limits()

    assert isinstance(limits, Limits)
    assert limits.max_children == 7
    assert limits.max_tree_depth == 3

    with pytest.raises(Exception):
        limits.max_children = 99  # type: ignore[misc]


@pytest.mark.unit
def test_get_settings_cached():
    """Test cached settings accessor returns one instance."""
    assert get_settings() is get_settings()
