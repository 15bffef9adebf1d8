"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

import pytest

from db.connection import ConnectionPool
from db.init_db import create_tables

# Integration tests run only when a real PostgreSQL is available.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "")


@pytest.fixture
def mock_conn():
    """A psycopg2-like connection that is open."""
    conn = MagicMock()
    conn.closed = 0
    return conn


@pytest.fixture
def mock_cursor(mock_conn):
    """The cursor yielded by ``with conn.cursor() as cur``."""
    return mock_conn.cursor.return_value.__enter__.return_value


@pytest.fixture
def mock_pool(mock_conn):
    """A ConnectionPool double whose ``connection()`` yields mock_conn."""
    db_pool = MagicMock(spec=ConnectionPool)
    db_pool.connection.return_value.__enter__.return_value = mock_conn
    return db_pool


@pytest.fixture
def pg_pool():
    """
    A ConnectionPool on an empty justifications table.

    Point TEST_DATABASE_URL at a disposable PostgreSQL database to enable.
    """
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    db_pool = ConnectionPool(
        TEST_DATABASE_URL,
        sslmode=os.getenv("TEST_DB_SSLMODE", "prefer"),
        max_conn=4,
    )
    create_tables(db_pool)
    with db_pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE justifications;")
        conn.commit()
    try:
        yield db_pool
    finally:
        db_pool.shutdown()
