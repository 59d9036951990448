"""Staking delegation data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Delegation:
    """Bonded stake from a delegator to a validator.

    Attributes:
        delegator_address: Account address of the delegator.
        validator_address: Operator address of the validator.
        denom: Staking denomination.
        amount: Bonded amount.
        shares: Delegator shares held in the validator.
    """

    delegator_address: str
    validator_address: str
    denom: str
    amount: float
    shares: float | None = None


@dataclass(frozen=True)
class Undelegation:
    """Single unbonding entry; keyed by validator and completion time.

    Attributes:
        delegator_address: Account address of the delegator.
        validator_address: Operator address of the validator.
        denom: Staking denomination.
        amount: Amount being unbonded.
        completion_time: When the tokens become liquid.
        creation_height: Height at which the unbonding started.
    """

    delegator_address: str
    validator_address: str
    denom: str
    amount: float
    completion_time: datetime | None = None
    creation_height: int | None = None
