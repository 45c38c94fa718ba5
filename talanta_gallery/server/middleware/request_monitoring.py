"""
Request Monitoring Middleware for FastAPI.

Logs every request with its status and duration through
``core.monitoring.log_api_request`` (Logfire when enabled, debug log
otherwise), adds ``X-Process-Time`` and ``X-Request-ID`` headers and flags
slow requests.

The request id is taken from an incoming ``X-Request-ID`` header when it is
a short token, otherwise generated, and is attached to every log record
emitted while the request is handled.
"""

import re
import time
import uuid
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from talanta_gallery.core.logging_config import get_logger, request_id_var
from talanta_gallery.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000
REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a well-formed caller id so logs can be correlated across services."""
    if incoming and _REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestMonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for tracing API requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and log metrics.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler

        Returns:
            The HTTP response
        """
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)

        try:
            try:
                response = await call_next(request)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(f"API request failed: {method} {path}", extra={"method": method, "path": path})
                log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)
            response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
            response.headers[REQUEST_ID_HEADER] = request_id

            if duration_ms > SLOW_REQUEST_MS:
                logger.warning(
                    f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                    extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": response.status_code},
                )
            return response
        finally:
            request_id_var.reset(token)
