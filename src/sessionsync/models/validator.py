"""Validator data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Validator:
    """Validator record, unique by ``operator_address``.

    Attributes:
        operator_address: Validator operator (``...valoper...``) address.
        name: Moniker.
        identity: Keybase identity fingerprint used for the picture lookup.
        website: Self-reported website.
        details: Self-reported description.
        status: Bonding status (``BOND_STATUS_BONDED`` etc.).
        jailed: Whether the validator is jailed.
        tokens: Total bonded tokens.
        commission: Current commission rate (0..1).
        picture: Avatar URL, filled in by enrichment.
    """

    operator_address: str
    name: str = ""
    identity: str | None = None
    website: str | None = None
    details: str | None = None
    status: str | None = None
    jailed: bool = False
    tokens: float = 0.0
    commission: float | None = None
    picture: str | None = None

    @property
    def is_bonded(self) -> bool:
        return self.status == "BOND_STATUS_BONDED"
