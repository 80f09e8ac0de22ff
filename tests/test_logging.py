"""
Tests for structured logging helpers.
"""

import structlog

from vending.observability.logging import add_app_context, get_logger, log_context


class TestAddAppContext:
    """Tests for the app context processor."""

    def test_adds_service_and_version(self):
        """Every event carries service and version."""
        event = add_app_context(None, "info", {"event": "purchase_completed"})
        assert event["service"] == "vending-engine"
        assert event["version"] == "0.1.0"
        assert event["event"] == "purchase_completed"


class TestLogContext:
    """Tests for log_context."""

    def test_binds_and_unbinds(self):
        """Context variables exist only inside the block."""
        with log_context(session_id="abc123"):
            assert structlog.contextvars.get_contextvars()["session_id"] == "abc123"
        assert "session_id" not in structlog.contextvars.get_contextvars()

    def test_unbinds_on_error(self):
        """Context is cleared even when the block raises."""
        try:
            with log_context(session_id="abc123"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert "session_id" not in structlog.contextvars.get_contextvars()


class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_usable_logger(self):
        """Logger accepts structured keyword context."""
        logger = get_logger("vending.tests")
        logger.info("test_event", amount_minor=5000)
