"""
Monitoring and Tracing Configuration Module.

This module provides optional integration with Pydantic Logfire for tracing
the gallery API, including:
- API endpoint tracing
- Database operation monitoring
- Outbound email provider calls (HTTPX)
- Business events (artist decisions, orders, email delivery)

Logfire is enabled with ``LOGFIRE_ENABLED=true`` and a ``LOGFIRE_TOKEN``.
When it is disabled every helper below is a no-op apart from debug logging.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "talanta-gallery")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "talanta-gallery-api")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance. If provided, enables automatic
             tracing of FastAPI endpoints.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        if LOGFIRE_TRACE_SQLALCHEMY:
            try:
                logfire.instrument_sqlalchemy()
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if LOGFIRE_TRACE_HTTPX:
            try:
                logfire.instrument_httpx()
                logger.info("Logfire: HTTPX instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument HTTPX: {e}")

        if LOGFIRE_TRACE_FASTAPI and app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

        logger.info(
            f"Logfire monitoring initialized: "
            f"project={LOGFIRE_PROJECT_NAME}, "
            f"environment={LOGFIRE_ENVIRONMENT}, "
            f"service={LOGFIRE_SERVICE_NAME}"
        )

    except ImportError:
        logger.warning(
            "Logfire is enabled but 'logfire' package is not installed. "
            "Install it with: pip install 'talanta-gallery[monitoring]'"
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def _logfire_info(message: str, **attributes) -> bool:
    if not LOGFIRE_ENABLED:
        return False
    try:
        import logfire

        logfire.info(message, **attributes)
        return True
    except Exception:
        return False


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _logfire_info(
        "API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms
    ):
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")


def log_artist_decision(artist_id: int, decision: str, email_sent: bool) -> None:
    """
    Log an admin decision on an artist registration.

    Args:
        artist_id: The artist the decision applies to
        decision: ``approved`` or ``rejected``
        email_sent: Whether the notification email was delivered
    """
    if not _logfire_info("Artist registration decided", artist_id=artist_id, decision=decision, email_sent=email_sent):
        logger.debug(f"Artist {artist_id} {decision} (email_sent={email_sent})")


def log_order_created(order_id: int, total_amount: str, item_count: int) -> None:
    """
    Log the creation of a storefront order.

    Args:
        order_id: The order identifier
        total_amount: Order total as a decimal string
        item_count: Number of order lines
    """
    if not _logfire_info("Order created", order_id=order_id, total_amount=total_amount, item_count=item_count):
        logger.debug(f"Order {order_id} created: total={total_amount}, items={item_count}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
