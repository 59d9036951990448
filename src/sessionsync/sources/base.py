"""Abstract base class for dashboard data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator


class BaseDataSource(ABC):
    """Abstract base for all read-only chain data sources.

    Every method is a coroutine performing one remote query. Failures are
    raised as ``FetchError`` carrying a human-readable message; the
    orchestrator isolates them per fetch.
    """

    # --- Chain ---

    @abstractmethod
    async def get_block(self) -> Block:
        """Fetch the latest block."""
        ...

    # --- Account ---

    @abstractmethod
    async def get_balances(self, address: str, currency: str) -> list[Balance]:
        """Fetch spendable balances, valued in ``currency`` where possible."""
        ...

    @abstractmethod
    async def get_rewards(self, address: str, currency: str) -> list[Reward]:
        """Fetch outstanding staking rewards per validator and denomination."""
        ...

    @abstractmethod
    async def get_delegations_for_delegator(self, address: str) -> list[Delegation]:
        ...

    @abstractmethod
    async def get_undelegations_for_delegator(self, address: str) -> list[Undelegation]:
        ...

    @abstractmethod
    async def get_transactions(self, address: str, page_number: int) -> list[Transaction]:
        """Fetch one zero-based page of the account's transactions, newest first.

        An empty list means the page is past the end of the history.
        """
        ...

    # --- Staking ---

    @abstractmethod
    async def get_validators(self) -> list[Validator]:
        ...

    @abstractmethod
    async def get_self_stake(self, validator: Validator) -> float:
        """Return the amount the validator operator has delegated to itself."""
        ...

    @abstractmethod
    async def get_validator_delegations(self, validator: Validator) -> list[Delegation]:
        ...

    # --- Governance ---

    @abstractmethod
    async def get_proposals(self, validators: list[Validator]) -> list[Proposal]:
        """Fetch proposals; ``validators`` gives the bonded stake for turnout."""
        ...

    @abstractmethod
    async def get_governance_overview(self) -> GovernanceOverview:
        ...

    # --- Lifecycle ---

    async def close(self) -> None:
        """Release transport resources (default: nothing to release)."""
        return None
