"""
models/justification.py
-----------------------
Domain model for stored finality justifications.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


def justification_id(chain_id: str, block_number: int) -> str:
    """
    Derive the primary key for a (chain, block) pair.

    The key is lowercased, so chain ids that differ only in case map to
    the same record.
    """
    return f"{chain_id}-{block_number}".lower()


@dataclass
class Justification:
    """
    Represents the justification stored for one block of one chain.

    Attributes:
        avail_chain_id: External identifier of the chain the block belongs to.
        block_number: Block height on that chain.
        data: The justification payload, any JSON-serializable value.
            Never interpreted by this service.
        id: Primary key, derived from chain id and block number when omitted.
        created_at: When the payload was last written.
    """
    avail_chain_id: str
    block_number: int
    data: Any
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.id is None:
            self.id = justification_id(self.avail_chain_id, self.block_number)

    def __str__(self) -> str:
        return f"{self.avail_chain_id} #{self.block_number} ({self.created_at})"
