"""
main.py
-------
Entry point for the justification query API.

Responsibilities:
    - Build the connection pool and check the database answers.
    - Optionally bootstrap the schema.
    - Serve the HTTP routes with uvicorn.
    - Close the pool when the server stops (SIGINT / SIGTERM).
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import API_HOST, API_PORT, DATABASE_URL, DB_AUTO_CREATE_SCHEMA, DB_SSLMODE
from db.connection import ConnectionPool
from db.init_db import create_tables
from handlers import justification_handler
from repositories.justification_repo import JustificationRepository
from services.justification_service import JustificationService
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(connection_pool: Optional[ConnectionPool] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        connection_pool: Pool to serve from. When omitted, one is built from
            the configured DATABASE_URL at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ── 1. Database setup ─────────────────────────────
        logger.info("Initializing database...")
        db_pool = connection_pool or ConnectionPool(DATABASE_URL, sslmode=DB_SSLMODE)
        try:
            db_pool.open()
            db_pool.ping()
            if DB_AUTO_CREATE_SCHEMA:
                create_tables(db_pool)

            # ── 2. Wire services ──────────────────────────
            app.state.connection_pool = db_pool
            app.state.justification_service = JustificationService(
                JustificationRepository(db_pool)
            )
            logger.info("Justification API is running.")
            yield
        finally:
            # ── 3. Cleanup on shutdown ────────────────────
            db_pool.shutdown()
            logger.info("Justification API stopped.")

    app = FastAPI(
        title="Justification API",
        description="Query finality justifications by chain and block number",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(justification_handler.router)
    return app


app = create_app()


def main() -> None:
    """Run the API server until it receives SIGINT or SIGTERM."""
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
