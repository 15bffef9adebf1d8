"""
handlers/justification_handler.py
----------------------------------
HTTP routes for justification lookups and service health.

Every lookup outcome, including failures, is answered with HTTP 200 and a
``success`` flag in the body; clients rely on that shape.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from db.connection import ConnectionPool
from db.errors import DatabaseError
from services.justification_service import JustificationService, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "No justification found"
DATABASE_FAILURE = "Database error occurred"


def get_justification_service(request: Request) -> JustificationService:
    """Dependency: the service wired into the app at startup."""
    return request.app.state.justification_service


def get_connection_pool(request: Request) -> ConnectionPool:
    """Dependency: the app's connection pool."""
    return request.app.state.connection_pool


@router.get("/justification")
def get_justification(
    block_number: Optional[str] = Query(None, alias="blockNumber"),
    chain_id: Optional[str] = Query(None, alias="availChainId"),
    service: JustificationService = Depends(get_justification_service),
) -> dict:
    """Get the justification for a given block of a given chain."""
    logger.info(f"Justification request: blockNumber={block_number!r} availChainId={chain_id!r}")

    try:
        chain_id, number = service.parse_query(block_number, chain_id)
    except ValidationError as e:
        return {"success": False, "error": str(e)}

    try:
        justification = service.get_justification(chain_id, number)
    except DatabaseError as e:
        logger.error(f"Database error ({type(e).__name__}) for {chain_id} #{number}: {e}")
        return {"success": False, "error": DATABASE_FAILURE}

    if justification is None:
        return {"success": False, "error": NOT_FOUND}

    return {"success": True, "justification": justification.data}


@router.get("/health")
def health(connection_pool: ConnectionPool = Depends(get_connection_pool)) -> JSONResponse:
    """Report whether the database answers."""
    try:
        connection_pool.ping()
    except DatabaseError as e:
        logger.warning(f"Health check failed: {e}")
        return JSONResponse({"status": "unhealthy"}, status_code=503)
    return JSONResponse({"status": "healthy"})
