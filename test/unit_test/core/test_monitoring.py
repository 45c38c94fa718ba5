"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire initialization with various configurations
- Feature flag handling
- Business event helpers (API requests, artist decisions, orders, errors)
- Graceful degradation when Logfire is disabled or failing
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from talanta_gallery.core import monitoring

MODULE = "talanta_gallery.core.monitoring"


@pytest.fixture
def fake_logfire():
    """Install a mock ``logfire`` module for the duration of a test."""
    mock = MagicMock()
    with patch.dict(sys.modules, {"logfire": mock}):
        yield mock


class TestInitializeLogfire:
    def test_disabled(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            monitoring.initialize_logfire()

        fake_logfire.configure.assert_not_called()

    def test_enabled_without_token(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", ""):
            with patch(f"{MODULE}.logger") as mock_logger:
                monitoring.initialize_logfire()

        fake_logfire.configure.assert_not_called()
        mock_logger.warning.assert_called_once()

    def test_configures_and_instruments(self, fake_logfire):
        app = MagicMock()

        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "lf-token"):
            monitoring.initialize_logfire(app)

        assert fake_logfire.configure.call_args[1]["token"] == "lf-token"
        fake_logfire.instrument_sqlalchemy.assert_called_once()
        fake_logfire.instrument_httpx.assert_called_once()
        fake_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_skips_fastapi_without_app(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "lf-token"):
            monitoring.initialize_logfire()

        fake_logfire.instrument_fastapi.assert_not_called()

    def test_instrumentation_failure_is_not_fatal(self, fake_logfire):
        fake_logfire.instrument_sqlalchemy.side_effect = RuntimeError("no engine")

        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "lf-token"):
            monitoring.initialize_logfire()

        fake_logfire.instrument_httpx.assert_called_once()

    def test_configure_failure_is_logged(self, fake_logfire):
        fake_logfire.configure.side_effect = RuntimeError("bad token")

        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", "lf-token"),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            monitoring.initialize_logfire()

        mock_logger.error.assert_called_once()


class TestEventHelpers:
    def test_disabled_helpers_fall_back_to_debug_log(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False), patch(f"{MODULE}.logger") as mock_logger:
            monitoring.log_api_request("GET", "/api/artworks", 200, 3.5)
            monitoring.log_artist_decision(4, "approved", True)
            monitoring.log_order_created(9, "2001.00", 2)

        fake_logfire.info.assert_not_called()
        assert mock_logger.debug.call_count == 3
        assert "GET /api/artworks -> 200" in mock_logger.debug.call_args_list[0][0][0]

    def test_enabled_helpers_send_to_logfire(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.logger") as mock_logger:
            monitoring.log_order_created(9, "2001.00", 2)
            monitoring.log_artist_decision(4, "rejected", False)

        assert fake_logfire.info.call_args_list[0][1] == {"order_id": 9, "total_amount": "2001.00", "item_count": 2}
        assert fake_logfire.info.call_args_list[1][1]["decision"] == "rejected"
        mock_logger.debug.assert_not_called()

    def test_logfire_failure_falls_back(self, fake_logfire):
        fake_logfire.info.side_effect = RuntimeError("exporter down")

        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.logger") as mock_logger:
            monitoring.log_api_request("POST", "/api/orders", 201, 12.0)

        mock_logger.debug.assert_called_once()


class TestLogError:
    def test_disabled_is_noop(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            monitoring.log_error("ValueError", "boom")

        fake_logfire.error.assert_not_called()

    def test_enabled_forwards_context(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_error("ValueError", "boom", {"error_id": "abc"})

        fake_logfire.error.assert_called_once_with("ValueError: boom", error_id="abc")
