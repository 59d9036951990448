"""Keybase avatar lookup for validators.

Validators publish a Keybase key fingerprint as ``identity``; the
matching user's primary picture becomes ``Validator.picture``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

import httpx

from sessionsync.enrichment.base import BaseValidatorEnricher, ChunkCallback
from sessionsync.models.validator import Validator

logger = logging.getLogger(__name__)


class KeybaseEnricher(BaseValidatorEnricher):
    """Looks up validator pictures chunk by chunk.

    Lookups inside a chunk run concurrently; a chunk is delivered once all
    its lookups finished. Validators without identity, or that already
    have a picture, are skipped. A failed lookup leaves the validator as
    it was.
    """

    def __init__(
        self,
        base_url: str = "https://keybase.io",
        chunk_size: int = 20,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def enrich(self, validators: list[Validator], on_chunk: ChunkCallback) -> None:
        pending = [v for v in validators if v.identity and not v.picture]
        for start in range(0, len(pending), self.chunk_size):
            chunk = pending[start:start + self.chunk_size]
            pictures = await asyncio.gather(*(self._lookup(v.identity) for v in chunk))
            updated = [
                replace(v, picture=url) for v, url in zip(chunk, pictures) if url
            ]
            if updated:
                on_chunk(updated)

    async def _lookup(self, identity: str | None) -> str | None:
        try:
            response = await self.client.get(
                "/_/api/1.0/user/lookup.json",
                params={"key_suffix": identity, "fields": "pictures"},
            )
            response.raise_for_status()
            users = response.json().get("them") or []
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Keybase lookup for %s failed: %s", identity, exc)
            return None
        for user in users:
            url = (((user or {}).get("pictures") or {}).get("primary") or {}).get("url")
            if url:
                return url
        return None
