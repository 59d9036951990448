"""Governance data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Proposal:
    """Governance proposal.

    Attributes:
        proposal_id: Proposal id.
        title: Proposal title.
        description: Proposal body.
        status: Proposal status (``PROPOSAL_STATUS_VOTING_PERIOD`` etc.).
        submit_time: Submission time.
        voting_end_time: End of the voting period.
        tally: Vote totals keyed by option (yes, no, abstain, no_with_veto).
            Excluded from the hash.
        turnout: Share of bonded stake that voted, when computable.
    """

    proposal_id: int
    title: str
    description: str = ""
    status: str | None = None
    submit_time: datetime | None = None
    voting_end_time: datetime | None = None
    tally: dict[str, float] | None = field(default=None, hash=False)
    turnout: float | None = None


@dataclass(frozen=True)
class GovernanceOverview:
    """Chain-wide governance figures.

    Attributes:
        total_staked: Bonded tokens across all validators.
        community_pool: Community pool size in the staking denomination.
        quorum: Minimum turnout for a valid vote.
        threshold: Minimum yes share for a proposal to pass.
        veto_threshold: Veto share that rejects a proposal.
    """

    total_staked: float
    community_pool: float | None = None
    quorum: float | None = None
    threshold: float | None = None
    veto_threshold: float | None = None
