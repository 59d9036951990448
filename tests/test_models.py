"""Tests for data models."""

from dataclasses import FrozenInstanceError

import pytest

from sessionsync.models.balance import Balance
from sessionsync.models.governance import Proposal
from sessionsync.models.snapshot import SESSION_FIELDS, Snapshot
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator


class TestValidator:
    def test_defaults(self):
        v = Validator(operator_address="cosmosvaloper1aaa")
        assert v.name == ""
        assert v.picture is None
        assert v.jailed is False

    def test_is_bonded(self):
        assert Validator(operator_address="x", status="BOND_STATUS_BONDED").is_bonded
        assert not Validator(operator_address="x", status="BOND_STATUS_UNBONDING").is_bonded

    def test_frozen(self):
        v = Validator(operator_address="x")
        with pytest.raises(FrozenInstanceError):
            v.picture = "p.png"  # type: ignore[misc]


class TestBalance:
    def test_currency_default(self):
        assert Balance(denom="uatom", amount=1.0).currency == "USD"


class TestTransaction:
    def test_equality_by_value(self):
        assert Transaction(key="a", hash="A") == Transaction(key="a", hash="A")
        assert Transaction(key="a", hash="A") != Transaction(key="a", hash="A", memo="m")

    def test_hashable_with_fee(self):
        tx = Transaction(key="a", hash="A", fee={"uatom": 5000.0})
        assert hash(tx) == hash(Transaction(key="a", hash="A", fee={"uatom": 5000.0}))
        assert tx != Transaction(key="a", hash="A", fee={"uatom": 1.0})


class TestProposal:
    def test_hashable_with_tally(self):
        proposal = Proposal(proposal_id=1, title="Upgrade", tally={"yes": 3.0})
        assert proposal in {proposal}


class TestSnapshot:
    def test_session_fields_exist(self):
        snap = Snapshot()
        for name in SESSION_FIELDS:
            assert hasattr(snap, name)

    def test_hashable_with_transactions(self):
        snap = Snapshot(
            transactions=(Transaction(key="a", hash="A", fee={"uatom": 1.0}),),
            proposals=(Proposal(proposal_id=1, title="Upgrade", tally={"yes": 3.0}),),
        )
        assert hash(snap) == hash(snap)

    def test_chain_fields_are_not_session_scoped(self):
        for name in ("block", "validators", "proposals", "governance_overview"):
            assert name not in SESSION_FIELDS
