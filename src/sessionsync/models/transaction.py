"""Transaction data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction history entry, unique by ``key``.

    Attributes:
        key: Unique transaction id within the history list.
        hash: Transaction hash.
        height: Inclusion height.
        timestamp: Inclusion time.
        type: Message type of the first message.
        success: Whether the transaction executed successfully.
        memo: Transaction memo.
        fee: Fee amounts keyed by denomination. Excluded from the hash.
    """

    key: str
    hash: str
    height: int | None = None
    timestamp: datetime | None = None
    type: str | None = None
    success: bool = True
    memo: str = ""
    fee: dict[str, float] | None = field(default=None, hash=False)
