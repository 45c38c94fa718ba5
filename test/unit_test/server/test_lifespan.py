"""
Unit tests for FastAPI application lifespan management.

Tests verify that application startup creates the schema, bootstraps the
admin account and prepares the upload directory, and that a database failure
does not prevent the server from starting.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from talanta_gallery.server.main import lifespan

pytestmark = pytest.mark.asyncio

MAIN = "talanta_gallery.server.main"


def _session_maker():
    session = MagicMock()
    session_ctx = MagicMock()
    session_ctx.__aenter__ = AsyncMock(return_value=session)
    session_ctx.__aexit__ = AsyncMock(return_value=None)
    return MagicMock(return_value=session_ctx), session


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_startup_initializes_database_and_admin(self):
        maker, session = _session_maker()

        with (
            patch(f"{MAIN}.init_db", new_callable=AsyncMock) as mock_init_db,
            patch(f"{MAIN}.async_session_maker", maker),
            patch(f"{MAIN}.bootstrap_admin", new_callable=AsyncMock) as mock_bootstrap,
            patch(f"{MAIN}.get_media_storage") as mock_storage,
        ):
            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()
                mock_bootstrap.assert_awaited_once()
                repos = mock_bootstrap.call_args[0][0]
                assert repos.session is session
                mock_storage.return_value.ensure_directory.assert_called_once()

    async def test_database_failure_does_not_abort_startup(self):
        maker, _ = _session_maker()

        with (
            patch(f"{MAIN}.init_db", new_callable=AsyncMock, side_effect=RuntimeError("db down")),
            patch(f"{MAIN}.async_session_maker", maker),
            patch(f"{MAIN}.bootstrap_admin", new_callable=AsyncMock) as mock_bootstrap,
            patch(f"{MAIN}.get_media_storage") as mock_storage,
            patch(f"{MAIN}.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        mock_bootstrap.assert_not_awaited()
        mock_logger.error.assert_called_once()
        mock_storage.return_value.ensure_directory.assert_called_once()


class TestLifespanShutdown:
    async def test_shutdown_is_logged(self):
        maker, _ = _session_maker()

        with (
            patch(f"{MAIN}.init_db", new_callable=AsyncMock),
            patch(f"{MAIN}.async_session_maker", maker),
            patch(f"{MAIN}.bootstrap_admin", new_callable=AsyncMock),
            patch(f"{MAIN}.get_media_storage"),
            patch(f"{MAIN}.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        assert "Shutting down" in mock_logger.info.call_args_list[-1][0][0]
