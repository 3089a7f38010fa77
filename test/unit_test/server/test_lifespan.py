"""
Unit tests for FastAPI application lifespan management.

Tests verify that the application startup and shutdown events are properly
handled, including database initialization failures.
"""

from unittest.mock import AsyncMock, patch

from fastapi import FastAPI

from leadsync.server.main import app, lifespan


class TestLifespan:
    async def test_startup_initializes_database(self):
        with patch("leadsync.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()

    async def test_startup_and_shutdown_are_logged(self):
        with (
            patch("leadsync.server.main.init_db", new_callable=AsyncMock),
            patch("leadsync.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert "Starting up Leadsync Server..." in messages
        assert "Database initialized successfully" in messages
        assert "Shutting down Leadsync Server..." in messages

    async def test_database_failure_does_not_stop_startup(self):
        with (
            patch("leadsync.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("leadsync.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = RuntimeError("database is locked")

            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_called_once()
        assert "database is locked" in mock_logger.error.call_args[0][0]


def test_routers_are_mounted():
    paths = {getattr(route, "path", None) for route in app.routes}

    assert "/health" in paths
    assert "/api/v1/leads/{lead_id}/outreach" in paths
    assert "/api/v1/payments/stripe/sync" in paths
