"""Snapshot store — single-writer holder of the synchronized state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any

from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.snapshot import Snapshot
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.pagination import merge_transaction_page

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


class SnapshotStore:
    """Holds the current immutable ``Snapshot``.

    Every mutation builds a new snapshot and publishes it with a single
    assignment, so readers never see a half-applied update. Mutations are
    synchronous; under asyncio they cannot interleave with each other.

    Usage::

        store = SnapshotStore()
        store.subscribe(render)
        store.set_block(block)
        store.snapshot.block
    """

    def __init__(self, initial: Snapshot | None = None) -> None:
        self._snapshot = initial or Snapshot()
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    # ------------------------------------------------------------ listeners

    def subscribe(self, listener: SnapshotListener) -> None:
        """Call ``listener`` with the new snapshot after every commit."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -------------------------------------------------------------- setters

    def set_block(self, block: Block | None) -> None:
        self._commit(block=block)

    def set_balances(self, balances: Iterable[Balance]) -> None:
        self._commit(balances=tuple(balances))

    def set_balances_loaded(self, loaded: bool | None) -> None:
        self._commit(balances_loaded=loaded)

    def set_rewards(self, rewards: Iterable[Reward]) -> None:
        self._commit(rewards=tuple(rewards))

    def set_delegations(self, delegations: Iterable[Delegation]) -> None:
        self._commit(delegations=tuple(delegations))

    def set_undelegations(self, undelegations: Iterable[Undelegation]) -> None:
        self._commit(undelegations=tuple(undelegations))

    def set_validators(self, validators: Iterable[Validator]) -> None:
        self._commit(validators=tuple(validators))

    def set_proposals(self, proposals: Iterable[Proposal]) -> None:
        self._commit(proposals=tuple(proposals))

    def set_governance_overview(self, overview: GovernanceOverview | None) -> None:
        self._commit(governance_overview=overview)

    def set_transactions(self, transactions: Iterable[Transaction]) -> None:
        self._commit(transactions=tuple(transactions))

    def set_transactions_loaded(self, loaded: bool | None) -> None:
        self._commit(transactions_loaded=loaded)

    def set_more_transactions_available(self, available: bool) -> None:
        self._commit(more_transactions_available=available)

    # ----------------------------------------------------------- composites

    def merge_transaction_page(
        self, transactions: Iterable[Transaction], page_number: int,
    ) -> None:
        """Merge one transaction page and update the paging flags together."""
        page = tuple(transactions)
        merged = merge_transaction_page(self._snapshot.transactions, page, page_number)
        self._commit(
            transactions=merged,
            transactions_loaded=True,
            more_transactions_available=len(page) > 0,
        )

    def reset_session(self) -> None:
        """Clear session-scoped fields; chain-wide fields are kept."""
        self._commit(
            balances=(),
            balances_loaded=None,
            rewards=(),
            delegations=(),
            undelegations=(),
            transactions=(),
            transactions_loaded=None,
            more_transactions_available=True,
        )

    # ------------------------------------------------------------ internal

    def _commit(self, **changes: Any) -> None:
        self._snapshot = replace(self._snapshot, **changes)
        logger.debug("Committed %s", ", ".join(sorted(changes)))
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
