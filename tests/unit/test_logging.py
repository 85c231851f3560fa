"""Logging configuration tests."""

import pytest
import structlog

from a2ui_engine import __version__
from a2ui_engine.core import LogContext
from a2ui_engine.core.logging_config import MAX_FIELD_LENGTH, add_engine_version, clip_long_values


@pytest.mark.unit
def test_clip_long_values():
    """Test long producer text is shortened and short fields are untouched."""
    line = "x" * (MAX_FIELD_LENGTH + 100)
    event = clip_long_values(None, "warning", {"event": "message_rejected", "excerpt": line, "count": 3})

    assert event["excerpt"].startswith("x" * MAX_FIELD_LENGTH)
    assert event["excerpt"].endswith(f"({len(line)} chars)")
    assert event["count"] == 3
    assert event["event"] == "message_rejected"


@pytest.mark.unit
def test_engine_version_added():
    """Test every event carries the engine version."""
    assert add_engine_version(None, "info", {"event": "x"})["engine"] == __version__


@pytest.mark.unit
def test_log_context_nesting_restores_outer_values():
    """Test leaving an inner context restores the outer binding."""
    with LogContext(surfaces="main"):
        with LogContext(surfaces="side"):
            assert structlog.contextvars.get_contextvars()["surfaces"] == "side"
        assert structlog.contextvars.get_contextvars()["surfaces"] == "main"

    assert "surfaces" not in structlog.contextvars.get_contextvars()
