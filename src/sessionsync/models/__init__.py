"""Session sync data models."""

from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.snapshot import SESSION_FIELDS, Snapshot
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator

__all__ = [
    "Block",
    "Balance",
    "Reward",
    "Delegation",
    "Undelegation",
    "Validator",
    "Proposal",
    "GovernanceOverview",
    "Transaction",
    "Snapshot",
    "SESSION_FIELDS",
]
