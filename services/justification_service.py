"""
services/justification_service.py
----------------------------------
Business logic for justification lookups.
Turns raw query-string values into typed keys and delegates to the repository.
"""

from typing import Any, Optional

from models.justification import Justification
from repositories.justification_repo import JustificationRepository
from utils.logger import get_logger

logger = get_logger(__name__)

MISSING_PARAMETERS = "Missing required parameters: blockNumber and availChainId"
INVALID_BLOCK_NUMBER = "Invalid parameter: blockNumber must be a non-negative integer"


class ValidationError(ValueError):
    """Request parameters are missing or malformed."""


class JustificationService:
    """Validates lookup requests and reads/writes justifications."""

    def __init__(self, repository: JustificationRepository):
        self.repo = repository

    @staticmethod
    def parse_query(block_number: Optional[str], chain_id: Optional[str]) -> tuple[str, int]:
        """
        Validate the two identifying query parameters.

        Args:
            block_number: Raw ``blockNumber`` value from the query string.
            chain_id: Raw ``availChainId`` value from the query string.

        Returns:
            Tuple of (chain_id, block_number).

        Raises:
            ValidationError: If a parameter is missing, empty or malformed.
        """
        if block_number is None or chain_id is None:
            raise ValidationError(MISSING_PARAMETERS)
        block_number = block_number.strip()
        chain_id = chain_id.strip()
        if not block_number or not chain_id:
            raise ValidationError(MISSING_PARAMETERS)
        if not block_number.isascii() or not block_number.isdigit():
            raise ValidationError(INVALID_BLOCK_NUMBER)
        return chain_id, int(block_number)

    def get_justification(self, chain_id: str, block_number: int) -> Optional[Justification]:
        """Fetch the justification for a block, or None if none is stored."""
        justification = self.repo.get(chain_id, block_number)
        if justification is None:
            logger.info(f"No justification for chain {chain_id} at block {block_number}")
        return justification

    def store_justification(self, chain_id: str, block_number: int, data: Any) -> None:
        """Store (or overwrite) the justification for a block."""
        if not chain_id:
            raise ValidationError("availChainId must not be empty")
        if block_number < 0:
            raise ValidationError(INVALID_BLOCK_NUMBER)
        self.repo.put(chain_id, block_number, data)

    def latest_block_number(self, chain_id: str) -> Optional[int]:
        """Highest block with a stored justification for a chain."""
        return self.repo.latest_block_number(chain_id)
