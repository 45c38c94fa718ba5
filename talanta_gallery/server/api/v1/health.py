"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter
from sqlalchemy import text

from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server and its database connection.",
    response_description="Status object.",
)
async def health_check(session: SessionDep):
    """
    Health check endpoint.

    Runs a trivial query so a broken database connection shows up as
    ``database: unavailable`` while the server itself still answers.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.warning(f"Health check database query failed: {e}")
        database = "unavailable"
    return {"status": "ok", "database": database}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.
    """
    return {"version": "1.0.0", "api": "v1"}
