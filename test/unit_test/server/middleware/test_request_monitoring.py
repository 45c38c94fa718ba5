"""
Unit tests for the request monitoring middleware.

This test suite covers:
- Request logging through ``log_api_request``
- The ``X-Process-Time`` header
- Slow request warnings
- Failures raised by downstream handlers
- Request id propagation into responses and log records
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.datastructures import Headers
from starlette.responses import Response

from talanta_gallery.core.logging_config import request_id_var
from talanta_gallery.server.middleware.request_monitoring import RequestMonitoringMiddleware, resolve_request_id

MODULE = "talanta_gallery.server.middleware.request_monitoring"


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/artworks"
    request.headers = Headers({})
    request.state = MagicMock()
    return request


@pytest.mark.asyncio
class TestRequestMonitoringMiddleware:
    async def test_logs_request_and_sets_header(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = RequestMonitoringMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        assert float(response.headers["X-Process-Time"]) >= 0
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/artworks"
        assert kwargs["status_code"] == 200

    async def test_client_errors_are_logged_with_their_status(self, mock_request):
        async def call_next(request):
            return Response(status_code=404)

        with patch(f"{MODULE}.log_api_request") as mock_log:
            await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 404

    async def test_slow_request_warning(self, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.SLOW_REQUEST_MS", -1),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    async def test_fast_request_has_no_warning(self, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        mock_logger.warning.assert_not_called()

    async def test_downstream_failure_is_logged_and_reraised(self, mock_request):
        async def call_next(request):
            raise RuntimeError("handler crashed")

        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(RuntimeError, match="handler crashed"):
                await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()


class TestResolveRequestId:
    def test_well_formed_id_is_kept(self):
        assert resolve_request_id("checkout-7f3a.2") == "checkout-7f3a.2"

    @pytest.mark.parametrize("incoming", [None, "", "bad id", "x" * 65, "forged\nline", "trailing\n"])
    def test_missing_or_malformed_id_is_replaced(self, incoming):
        generated = resolve_request_id(incoming)

        assert generated != incoming
        assert len(generated) == 32
        int(generated, 16)


@pytest.mark.asyncio
class TestRequestIdPropagation:
    async def test_generated_id_is_returned_and_scoped_to_request(self, mock_request):
        seen = {}

        async def call_next(request):
            seen["request_id"] = request_id_var.get()
            return Response(status_code=200)

        with patch(f"{MODULE}.log_api_request"):
            response = await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == seen["request_id"]
        assert seen["request_id"] != "-"
        assert request_id_var.get() == "-"

    async def test_caller_id_is_echoed(self, mock_request):
        mock_request.headers = Headers({"X-Request-ID": "storefront-42"})

        async def call_next(request):
            return Response(status_code=200)

        with patch(f"{MODULE}.log_api_request"):
            response = await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == "storefront-42"

    async def test_id_is_reset_after_failure(self, mock_request):
        async def call_next(request):
            raise RuntimeError("handler crashed")

        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger"):
            with pytest.raises(RuntimeError):
                await RequestMonitoringMiddleware(app=AsyncMock()).dispatch(mock_request, call_next)

        assert request_id_var.get() == "-"
