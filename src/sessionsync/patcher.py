"""Incremental validator patching for chunked enrichment."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sessionsync.models.validator import Validator

if TYPE_CHECKING:
    from sessionsync.store import SnapshotStore

logger = logging.getLogger(__name__)


def apply_validator_chunk(
    validators: Iterable[Validator],
    chunk: Iterable[Validator],
) -> tuple[Validator, ...]:
    """Replace validators by ``operator_address`` with records from ``chunk``.

    The result has the same length and order as ``validators``. Records in
    the chunk whose address is not in ``validators`` are ignored; within a
    chunk the last record for an address wins.
    """
    updates = {v.operator_address: v for v in chunk}
    return tuple(updates.get(v.operator_address, v) for v in validators)


class ValidatorPatcher:
    """``on_chunk`` callback that patches the store's current validator list.

    Each chunk is applied to whatever list is committed when it arrives,
    so a full validator fetch landing mid-enrichment gets patched too;
    addresses it no longer contains are dropped.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self.store = store
        self.chunks_applied = 0

    def __call__(self, chunk: list[Validator]) -> None:
        patched = apply_validator_chunk(self.store.snapshot.validators, chunk)
        self.store.set_validators(patched)
        self.chunks_applied += 1
        logger.debug(
            "Applied validator chunk %d (%d records)", self.chunks_applied, len(chunk)
        )
