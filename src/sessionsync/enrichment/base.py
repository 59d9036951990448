"""Abstract base class for validator enrichment producers."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

from sessionsync.models.validator import Validator

ChunkCallback = Callable[[list[Validator]], None]


class BaseValidatorEnricher(ABC):
    """Produces partial validator updates in chunks.

    ``enrich`` calls ``on_chunk`` zero or more times, each time with a
    list of updated validator records keyed by ``operator_address``, and
    returns when it is done.
    """

    @abstractmethod
    async def enrich(self, validators: list[Validator], on_chunk: ChunkCallback) -> None:
        ...

    async def close(self) -> None:
        return None


class NoopEnricher(BaseValidatorEnricher):
    """Delivers no chunks."""

    async def enrich(self, validators: list[Validator], on_chunk: ChunkCallback) -> None:
        return None


class StaticEnricher(BaseValidatorEnricher):
    """Replays pre-baked chunks, optionally pausing between them.

    Useful for tests and demos; the validators passed to ``enrich`` are
    recorded in ``runs`` and otherwise ignored.
    """

    def __init__(self, chunks: list[list[Validator]], pause: float = 0.0) -> None:
        self.chunks = chunks
        self.pause = pause
        self.runs: list[list[Validator]] = []

    async def enrich(self, validators: list[Validator], on_chunk: ChunkCallback) -> None:
        self.runs.append(list(validators))
        for chunk in self.chunks:
            if self.pause:
                await asyncio.sleep(self.pause)
            on_chunk(list(chunk))
