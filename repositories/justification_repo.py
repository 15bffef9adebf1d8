"""
repositories/justification_repo.py
-----------------------------------
Data access layer for justification records.
All SQL queries related to the `justifications` table live here.
"""

from typing import Any, Optional

from psycopg2 import extras

from db.connection import ConnectionPool
from models.justification import Justification, justification_id
from utils.logger import get_logger

logger = get_logger(__name__)


class JustificationRepository:
    """
    Repository for reads and upserts on the justifications table.

    Every call checks one connection out of the pool for a single statement.
    Failures surface as DatabaseConnectionError or StorageError; nothing is
    retried or cached here.
    """

    def __init__(self, connection_pool: ConnectionPool):
        self._pool = connection_pool

    # ── WRITE ─────────────────────────────────────────────

    def put(self, chain_id: str, block_number: int, data: Any) -> None:
        """
        Insert a justification, or overwrite the payload already stored for
        the same (chain, block).

        Uses PostgreSQL's ON CONFLICT (upsert) so concurrent writers to the
        same key never race between a read and a write; the last statement
        to commit wins.

        Args:
            chain_id: Chain identifier (case-insensitive).
            block_number: Block height.
            data: JSON-serializable payload, stored as-is.
        """
        record_id = justification_id(chain_id, block_number)
        sql = """
            INSERT INTO justifications (id, avail_chain_id, block_number, data)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id)
            DO UPDATE SET data = EXCLUDED.data, created_at = NOW();
        """
        with self._pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (record_id, chain_id, block_number, extras.Json(data)))
                conn.commit()
            except Exception as e:
                if not conn.closed:
                    conn.rollback()
                logger.error(f"Failed to store justification {record_id}: {e}")
                raise
        logger.info(f"Stored justification for chain {chain_id} at block {block_number}")

    # ── READ ──────────────────────────────────────────────

    def get(self, chain_id: str, block_number: int) -> Optional[Justification]:
        """
        Fetch the justification for a (chain, block).

        Returns:
            A Justification, or None if nothing is stored for that key.
        """
        sql = """
            SELECT id, avail_chain_id, block_number, data, created_at
            FROM justifications
            WHERE id = %s;
        """
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (justification_id(chain_id, block_number),))
                row = cur.fetchone()
        return self._row_to_justification(row) if row else None

    def exists(self, chain_id: str, block_number: int) -> bool:
        """Check whether a justification is stored for a (chain, block)."""
        sql = "SELECT 1 FROM justifications WHERE id = %s;"
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (justification_id(chain_id, block_number),))
                return cur.fetchone() is not None

    def latest_block_number(self, chain_id: str) -> Optional[int]:
        """
        Get the highest block number stored for a chain.

        Returns:
            The block number, or None if the chain has no justifications.
        """
        sql = """
            SELECT MAX(block_number)
            FROM justifications
            WHERE lower(avail_chain_id) = lower(%s);
        """
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (chain_id,))
                row = cur.fetchone()
        return row[0] if row else None

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_justification(row: tuple) -> Justification:
        """Convert a database row tuple to a Justification domain object."""
        return Justification(
            id=row[0],
            avail_chain_id=row[1],
            block_number=row[2],
            data=row[3],
            created_at=row[4],
        )
