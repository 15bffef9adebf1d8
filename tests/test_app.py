"""Tests for application startup and shutdown."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from db.connection import ConnectionPool
from db.errors import DatabaseConnectionError
from main import create_app
from services.justification_service import JustificationService


@pytest.fixture
def db_pool():
    return MagicMock(spec=ConnectionPool)


def test_lifespan_opens_wires_and_shuts_down(db_pool):
    app = create_app(db_pool)

    with TestClient(app):
        db_pool.open.assert_called_once()
        db_pool.ping.assert_called_once()
        assert app.state.connection_pool is db_pool
        assert isinstance(app.state.justification_service, JustificationService)
        db_pool.shutdown.assert_not_called()

    db_pool.shutdown.assert_called_once()


def test_schema_is_bootstrapped_when_enabled(db_pool):
    with patch("main.DB_AUTO_CREATE_SCHEMA", True), patch("main.create_tables") as create_tables:
        with TestClient(create_app(db_pool)):
            create_tables.assert_called_once_with(db_pool)


def test_schema_is_left_alone_by_default(db_pool):
    with patch("main.DB_AUTO_CREATE_SCHEMA", False), patch("main.create_tables") as create_tables:
        with TestClient(create_app(db_pool)):
            pass
    create_tables.assert_not_called()


def test_startup_failure_still_closes_the_pool(db_pool):
    db_pool.ping.side_effect = DatabaseConnectionError("connection refused")

    with pytest.raises(DatabaseConnectionError):
        with TestClient(create_app(db_pool)):
            pass

    db_pool.shutdown.assert_called_once()


def test_lookup_through_the_wired_app(db_pool, mock_conn, mock_cursor):
    db_pool.connection.return_value.__enter__.return_value = mock_conn
    mock_cursor.fetchone.return_value = ("chain1-5", "chain1", 5, {"ok": True}, None)

    with TestClient(create_app(db_pool)) as client:
        response = client.get("/justification?blockNumber=5&availChainId=Chain1")

    assert response.json() == {"success": True, "justification": {"ok": True}}
    assert mock_cursor.execute.call_args[0][1] == ("chain1-5",)
