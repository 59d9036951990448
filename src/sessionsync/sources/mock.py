"""Mock data source for testing and CI — no network required."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

from sessionsync.errors import FetchError, FetchErrorCode
from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.sources.base import BaseDataSource


class MockDataSource(BaseDataSource):
    """In-memory data source that returns configurable static data.

    Use ``set_block``, ``set_balances``, etc. to pre-load data. ``fail``
    makes a method raise ``FetchError`` and ``delay`` makes it suspend
    first, which lets tests control completion order. Every call is
    recorded in ``calls`` as ``(method, args)``.
    """

    def __init__(self) -> None:
        self._block: Block = Block(
            height=1,
            chain_id="mock-1",
            hash="00" * 32,
            time=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )
        self._balances: dict[str, list[Balance]] = {}
        self._rewards: dict[str, list[Reward]] = {}
        self._delegations: dict[str, list[Delegation]] = {}
        self._undelegations: dict[str, list[Undelegation]] = {}
        self._transaction_pages: dict[str, list[list[Transaction]]] = {}
        self._validators: list[Validator] = []
        self._proposals: list[Proposal] = []
        self._overview = GovernanceOverview(total_staked=0.0)
        self._self_stakes: dict[str, float] = {}
        self._validator_delegations: dict[str, list[Delegation]] = {}

        self._failures: dict[str, tuple[str, FetchErrorCode]] = {}
        self._delays: dict[str, float] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    # --- Pre-load helpers ---

    def set_block(self, block: Block) -> None:
        self._block = block

    def set_balances(self, address: str, balances: list[Balance]) -> None:
        self._balances[address] = balances

    def set_rewards(self, address: str, rewards: list[Reward]) -> None:
        self._rewards[address] = rewards

    def set_delegations(self, address: str, delegations: list[Delegation]) -> None:
        self._delegations[address] = delegations

    def set_undelegations(self, address: str, undelegations: list[Undelegation]) -> None:
        self._undelegations[address] = undelegations

    def set_transaction_pages(self, address: str, pages: list[list[Transaction]]) -> None:
        """Pre-load pages; page numbers past the last one return ``[]``."""
        self._transaction_pages[address] = pages

    def set_validators(self, validators: list[Validator]) -> None:
        self._validators = validators

    def set_proposals(self, proposals: list[Proposal]) -> None:
        self._proposals = proposals

    def set_governance_overview(self, overview: GovernanceOverview) -> None:
        self._overview = overview

    def set_self_stake(self, operator_address: str, amount: float) -> None:
        self._self_stakes[operator_address] = amount

    def set_validator_delegations(
        self, operator_address: str, delegations: list[Delegation],
    ) -> None:
        self._validator_delegations[operator_address] = delegations

    # --- Behaviour injection ---

    def fail(
        self,
        method: str,
        message: str = "mock failure",
        code: FetchErrorCode = FetchErrorCode.TRANSPORT,
    ) -> None:
        """Make ``method`` raise ``FetchError(message)`` until ``recover``."""
        self._failures[method] = (message, code)

    def recover(self, method: str) -> None:
        self._failures.pop(method, None)

    def delay(self, method: str, seconds: float) -> None:
        """Suspend ``method`` for ``seconds`` before it answers."""
        self._delays[method] = seconds

    def call_count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    # --- Data source implementation ---

    async def get_block(self) -> Block:
        await self._enter("get_block")
        return self._block

    async def get_balances(self, address: str, currency: str) -> list[Balance]:
        await self._enter("get_balances", address, currency)
        return list(self._balances.get(address, []))

    async def get_rewards(self, address: str, currency: str) -> list[Reward]:
        await self._enter("get_rewards", address, currency)
        return list(self._rewards.get(address, []))

    async def get_delegations_for_delegator(self, address: str) -> list[Delegation]:
        await self._enter("get_delegations_for_delegator", address)
        return list(self._delegations.get(address, []))

    async def get_undelegations_for_delegator(self, address: str) -> list[Undelegation]:
        await self._enter("get_undelegations_for_delegator", address)
        return list(self._undelegations.get(address, []))

    async def get_transactions(self, address: str, page_number: int) -> list[Transaction]:
        await self._enter("get_transactions", address, page_number)
        pages = self._transaction_pages.get(address, [])
        if page_number < len(pages):
            return list(pages[page_number])
        return []

    async def get_validators(self) -> list[Validator]:
        await self._enter("get_validators")
        return list(self._validators)

    async def get_self_stake(self, validator: Validator) -> float:
        await self._enter("get_self_stake", validator.operator_address)
        return self._self_stakes.get(validator.operator_address, 0.0)

    async def get_validator_delegations(self, validator: Validator) -> list[Delegation]:
        await self._enter("get_validator_delegations", validator.operator_address)
        return list(self._validator_delegations.get(validator.operator_address, []))

    async def get_proposals(self, validators: list[Validator]) -> list[Proposal]:
        await self._enter("get_proposals", len(validators))
        return list(self._proposals)

    async def get_governance_overview(self) -> GovernanceOverview:
        await self._enter("get_governance_overview")
        return self._overview

    async def close(self) -> None:
        self.closed = True

    # --- internal ---

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        seconds = self._delays.get(method)
        if seconds:
            await asyncio.sleep(seconds)
        failure = self._failures.get(method)
        if failure is not None:
            message, code = failure
            raise FetchError(message, code=code)
