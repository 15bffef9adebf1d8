"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionPool
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Justifications table: one opaque payload per (chain, block)
CREATE TABLE IF NOT EXISTS justifications (
    id              TEXT PRIMARY KEY,
    avail_chain_id  TEXT NOT NULL,
    block_number    INTEGER NOT NULL,
    data            JSON NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    UNIQUE (avail_chain_id, block_number)
);

-- Latest-block lookups compare chain ids case-insensitively
CREATE INDEX IF NOT EXISTS idx_justifications_chain_block
    ON justifications (lower(avail_chain_id), block_number);
"""


def create_tables(connection_pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with connection_pool.connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
            logger.info("Database schema initialized successfully.")
        except Exception as e:
            if not conn.closed:
                conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise


if __name__ == "__main__":
    from config import DATABASE_URL, DB_SSLMODE

    db_pool = ConnectionPool(DATABASE_URL, sslmode=DB_SSLMODE)
    try:
        create_tables(db_pool)
    finally:
        db_pool.shutdown()
    print("Database schema created successfully.")
