"""Block (chain head) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Block:
    """Latest chain head.

    Attributes:
        height: Block height.
        chain_id: Chain identifier.
        hash: Block hash (hex or base64, as the source reports it).
        time: Block timestamp.
        proposer_address: Consensus address of the block proposer.
    """

    height: int
    chain_id: str
    hash: str | None = None
    time: datetime | None = None
    proposer_address: str | None = None
