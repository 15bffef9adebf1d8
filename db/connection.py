"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool for efficient connection reuse,
bounded by a semaphore so callers wait for a free connection instead of
failing when every connection is checked out.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool

from db.errors import DatabaseConnectionError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    A bounded pool of PostgreSQL connections owned by the caller.

    The psycopg2 pool behind it is created lazily on the first ``acquire()``
    (or eagerly with ``open()``) and torn down exactly once by ``shutdown()``.
    """

    def __init__(
        self,
        dsn: str,
        sslmode: str = "prefer",
        min_conn: int = 1,
        max_conn: int = 10,
    ):
        """
        Args:
            dsn: libpq connection string or URL.
            sslmode: libpq TLS policy (``require``, ``prefer``, ``disable``...).
            min_conn: Connections opened when the pool is created.
            max_conn: Maximum number of connections checked out at once.
        """
        if max_conn < 1 or not 0 <= min_conn <= max_conn:
            raise ValueError(f"Invalid pool bounds: min_conn={min_conn}, max_conn={max_conn}")
        self._dsn = dsn
        self._sslmode = sslmode
        self._min_conn = min_conn
        self._max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._slots = threading.BoundedSemaphore(max_conn)
        self._lock = threading.Lock()
        self._closed = False
        self._in_use = 0

    @property
    def closed(self) -> bool:
        """True once ``shutdown()`` has been called."""
        return self._closed

    @property
    def in_use(self) -> int:
        """Number of connections currently checked out."""
        return self._in_use

    # ── Lifecycle ─────────────────────────────────────────

    def open(self) -> None:
        """
        Create the underlying pool if it does not exist yet.

        Raises:
            DatabaseConnectionError: If the database is unreachable, the
                credentials are invalid, or the pool was shut down.
        """
        with self._lock:
            self._ensure_pool()

    def _ensure_pool(self) -> pool.ThreadedConnectionPool:
        # Caller holds self._lock.
        if self._closed:
            raise DatabaseConnectionError("Connection pool has been shut down.")
        if self._pool is None:
            try:
                self._pool = pool.ThreadedConnectionPool(
                    self._min_conn, self._max_conn, self._dsn, sslmode=self._sslmode
                )
            except psycopg2.OperationalError as e:
                logger.error(f"Failed to initialize database pool: {e}")
                raise DatabaseConnectionError(str(e)) from e
            logger.info(
                f"Database connection pool initialized successfully "
                f"(max_conn={self._max_conn}, sslmode={self._sslmode})."
            )
        return self._pool

    def shutdown(self) -> None:
        """
        Close all connections in the pool.

        Only the first call has an effect. Connections still checked out are
        closed as well, so in-flight operations fail with
        DatabaseConnectionError.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            backing, self._pool = self._pool, None
        if backing is not None:
            backing.closeall()
        logger.info("Database connection pool closed.")

    # ── Checkout ──────────────────────────────────────────

    def acquire(self):
        """
        Check a connection out of the pool, waiting for a free slot if needed.

        Returns:
            A psycopg2 connection. Hand it back with ``release()``.

        Raises:
            DatabaseConnectionError: If no usable connection can be made.
        """
        self._slots.acquire()
        try:
            with self._lock:
                backing = self._ensure_pool()
            conn = backing.getconn()
        except DatabaseConnectionError:
            self._slots.release()
            raise
        except psycopg2.Error as e:
            self._slots.release()
            logger.error(f"Failed to acquire database connection: {e}")
            raise DatabaseConnectionError(str(e)) from e
        with self._lock:
            self._in_use += 1
        return conn

    def release(self, conn) -> None:
        """
        Return a connection obtained from ``acquire()``.

        Broken connections are discarded. After shutdown the connection is
        closed instead of pooled.
        """
        with self._lock:
            backing = self._pool
            self._in_use -= 1
        try:
            if backing is None:
                conn.close()
            else:
                backing.putconn(conn, close=bool(conn.closed))
        except pool.PoolError as e:
            # closeall() raced with this release
            logger.warning(f"Discarding connection on release: {e}")
            conn.close()
        finally:
            self._slots.release()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Scoped acquire/release of one connection.

        Database errors raised inside the block surface as StorageError, or
        as DatabaseConnectionError once shutdown has begun. The connection
        is released on every path.
        """
        conn = self.acquire()
        try:
            yield conn
        except psycopg2.Error as e:
            if self._closed:
                raise DatabaseConnectionError(
                    "Connection pool was shut down during the operation."
                ) from e
            raise StorageError(str(e)) from e
        finally:
            self.release(conn)

    def ping(self) -> None:
        """
        Run ``SELECT 1`` to check the database answers.

        Raises:
            DatabaseConnectionError: If no connection can be obtained.
            StorageError: If the query fails.
        """
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
            conn.rollback()
