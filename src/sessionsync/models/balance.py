"""Account balance data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Balance:
    """Spendable balance of one denomination.

    Attributes:
        denom: Denomination (e.g. ``uatom``).
        amount: Amount in the denomination's base unit.
        fiat_value: Value in ``currency``, when the source knows a price.
        currency: Display currency the fiat value is expressed in.
    """

    denom: str
    amount: float
    fiat_value: float | None = None
    currency: str = "USD"


@dataclass(frozen=True)
class Reward:
    """Outstanding staking reward from one validator in one denomination.

    Attributes:
        validator_address: Operator address of the rewarding validator.
        denom: Reward denomination.
        amount: Reward amount (may be fractional).
        fiat_value: Value in ``currency``, when the source knows a price.
        currency: Display currency the fiat value is expressed in.
    """

    validator_address: str
    denom: str
    amount: float
    fiat_value: float | None = None
    currency: str = "USD"
