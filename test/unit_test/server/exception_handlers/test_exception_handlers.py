"""
Unit tests for server exception handlers.

Tests cover the global handler for unexpected errors and the handlers that map
service errors, HTTP exceptions and validation failures to ``{message}``
bodies.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from talanta_gallery.core.errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    TwoFactorRequiredError,
)
from talanta_gallery.server.exception_handlers import setup_exception_handlers
from talanta_gallery.server.exception_handlers.domain_handlers import gallery_error_handler
from talanta_gallery.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/orders/7"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.mark.asyncio
    async def test_logs_error_with_context(self, mock_request):
        exc = ValueError("Test error")

        with patch("talanta_gallery.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

            mock_logger.error.assert_called_once()
            call_args = mock_logger.error.call_args
            assert "Unhandled exception" in call_args[0][0]
            assert call_args[1]["extra"]["error_type"] == "ValueError"
            assert call_args[1]["extra"]["path"] == "/api/orders/7"

    @pytest.mark.asyncio
    async def test_returns_500_with_error_id(self, mock_request):
        with patch("talanta_gallery.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, RuntimeError("db password is hunter2"))

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body["message"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
        assert len(body["error_id"]) == 12
        assert "hunter2" not in response.body.decode()

    @pytest.mark.asyncio
    async def test_error_ids_are_unique(self, mock_request):
        """Each failure gets its own reference id."""
        with patch("talanta_gallery.server.exception_handlers.global_handler.logger"):
            first = await global_exception_handler(mock_request, RuntimeError("x"))
            second = await global_exception_handler(mock_request, RuntimeError("x"))

        assert json.loads(first.body)["error_id"] != json.loads(second.body)["error_id"]

    @pytest.mark.asyncio
    async def test_request_without_client(self, mock_request):
        mock_request.client = None

        with patch("talanta_gallery.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, RuntimeError("x"))

            assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestGalleryErrorHandler:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("exc", "status_code", "body"),
        [
            (NotFoundError("Artwork", 12), 404, {"message": "Artwork 12 not found"}),
            (ConflictError("Email already subscribed"), 400, {"message": "Email already subscribed"}),
            (PermissionDeniedError("Artist access required"), 403, {"message": "Artist access required"}),
            (
                TwoFactorRequiredError(),
                401,
                {"message": "Two-factor authentication code required", "requires_two_factor": True},
            ),
            (
                InvalidTransitionError("order", "completed", "pending"),
                400,
                {
                    "message": "Cannot move order from 'completed' to 'pending'",
                    "current_status": "completed",
                    "requested_status": "pending",
                },
            ),
        ],
    )
    async def test_maps_status_and_details(self, mock_request, exc, status_code, body):
        response = await gallery_error_handler(mock_request, exc)

        assert response.status_code == status_code
        assert json.loads(response.body) == body


class Payload(BaseModel):
    name: str = Field(min_length=2)


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Exhibition", "current")

    @app.post("/payload")
    async def payload(body: Payload):
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


@pytest.mark.asyncio
class TestSetupExceptionHandlers:
    def _client(self, app: FastAPI) -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test")

    async def test_service_error(self, app):
        async with self._client(app) as client:
            response = await client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "Exhibition current not found"}

    async def test_routing_errors(self, app):
        async with self._client(app) as client:
            not_found = await client.get("/nowhere")
            not_allowed = await client.delete("/missing")

        assert not_found.json() == {"message": "Not Found"}
        assert not_allowed.status_code == 405
        assert not_allowed.json() == {"message": "Method Not Allowed"}

    async def test_validation_failure_is_400(self, app):
        async with self._client(app) as client:
            response = await client.post("/payload", json={"name": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["loc"] == ["body", "name"]
        assert "input" not in body["errors"][0]

    async def test_unhandled_error_is_500(self, app):
        async with self._client(app) as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
