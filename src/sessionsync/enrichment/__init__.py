"""Validator enrichment producers."""

from __future__ import annotations

from sessionsync.config import EnricherType, SyncConfig
from sessionsync.enrichment.base import (
    BaseValidatorEnricher,
    ChunkCallback,
    NoopEnricher,
    StaticEnricher,
)


def create_enricher(config: SyncConfig) -> BaseValidatorEnricher:
    """Build the enrichment producer selected by ``config.enrichment``."""
    if config.enrichment is EnricherType.KEYBASE:
        from sessionsync.enrichment.keybase import KeybaseEnricher

        return KeybaseEnricher(
            base_url=config.keybase_url,
            chunk_size=config.enrichment_chunk_size,
            timeout=config.request_timeout,
        )
    return NoopEnricher()


__all__ = [
    "BaseValidatorEnricher",
    "ChunkCallback",
    "NoopEnricher",
    "StaticEnricher",
    "create_enricher",
]
