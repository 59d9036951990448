"""Snapshot data model — the whole synchronized dashboard state."""

from __future__ import annotations

from dataclasses import dataclass

from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator

SESSION_FIELDS: tuple[str, ...] = (
    "balances",
    "balances_loaded",
    "rewards",
    "delegations",
    "undelegations",
    "transactions",
    "transactions_loaded",
    "more_transactions_available",
)


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time view of every store field.

    Collections are tuples so a published snapshot cannot be mutated by
    the rendering layer.

    Attributes:
        block: Latest chain head.
        balances: Account balances.
        balances_loaded: True once balances were fetched this session.
        rewards: Outstanding staking rewards.
        delegations: Active delegations.
        undelegations: Unbonding entries.
        validators: Validator set, patched in place by enrichment.
        proposals: Governance proposals.
        governance_overview: Chain-wide governance figures.
        transactions: Accumulated, deduplicated transaction history.
        transactions_loaded: True once any transaction page was merged.
        more_transactions_available: Whether the last page was non-empty.
    """

    block: Block | None = None
    balances: tuple[Balance, ...] = ()
    balances_loaded: bool | None = None
    rewards: tuple[Reward, ...] = ()
    delegations: tuple[Delegation, ...] = ()
    undelegations: tuple[Undelegation, ...] = ()
    validators: tuple[Validator, ...] = ()
    proposals: tuple[Proposal, ...] = ()
    governance_overview: GovernanceOverview | None = None
    transactions: tuple[Transaction, ...] = ()
    transactions_loaded: bool | None = None
    more_transactions_available: bool = True
