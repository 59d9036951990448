"""Shared fixtures for sessionsync tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from sessionsync.enrichment import NoopEnricher
from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.notifications import MemoryNotificationSink
from sessionsync.orchestrator import FetchOrchestrator
from sessionsync.session import StaticSessionProvider
from sessionsync.sources.mock import MockDataSource
from sessionsync.store import SnapshotStore

ADDRESS = "cosmos1qypqxpq9qcrsszg2pvxq6rs0zqg3yyc5lzv7xu"


def tx(key: str, height: int = 100) -> Transaction:
    return Transaction(key=key, hash=key.upper(), height=height)


@pytest.fixture
def address() -> str:
    return ADDRESS


@pytest.fixture
def sample_block() -> Block:
    return Block(
        height=19_000_000,
        chain_id="cosmoshub-4",
        hash="AB" * 32,
        time=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_validators() -> list[Validator]:
    return [
        Validator(operator_address="cosmosvaloper1aaa", name="Alpha",
                  identity="AAAA1111", status="BOND_STATUS_BONDED", tokens=600.0),
        Validator(operator_address="cosmosvaloper1bbb", name="Beta",
                  identity="BBBB2222", status="BOND_STATUS_BONDED", tokens=400.0),
        Validator(operator_address="cosmosvaloper1ccc", name="Gamma",
                  status="BOND_STATUS_UNBONDED", tokens=50.0),
    ]


@pytest.fixture
def mock_source(address, sample_block, sample_validators) -> MockDataSource:
    source = MockDataSource()
    source.set_block(sample_block)
    source.set_validators(sample_validators)
    source.set_balances(address, [Balance(denom="uatom", amount=1_000_000.0)])
    source.set_rewards(address, [
        Reward(validator_address="cosmosvaloper1aaa", denom="uatom", amount=12.5),
    ])
    source.set_delegations(address, [
        Delegation(delegator_address=address, validator_address="cosmosvaloper1aaa",
                   denom="uatom", amount=500_000.0),
    ])
    source.set_undelegations(address, [
        Undelegation(delegator_address=address, validator_address="cosmosvaloper1bbb",
                     denom="uatom", amount=1_000.0),
    ])
    source.set_transaction_pages(address, [
        [tx("a"), tx("b")],
        [tx("b"), tx("c")],
    ])
    return source


@pytest.fixture
def store() -> SnapshotStore:
    return SnapshotStore()


@pytest.fixture
def sink() -> MemoryNotificationSink:
    return MemoryNotificationSink()


@pytest.fixture
def session(address) -> StaticSessionProvider:
    return StaticSessionProvider(address=address, currency="EUR")


@pytest.fixture
def orchestrator(mock_source, store, sink, session) -> FetchOrchestrator:
    return FetchOrchestrator(
        source=mock_source,
        store=store,
        notifications=sink,
        session=session,
        enricher=NoopEnricher(),
    )
