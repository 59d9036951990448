"""Per-fetch outcome type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from sessionsync.errors import FetchError

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one fetch: either a value or a ``FetchError``.

    Fetchers never raise to their caller; they return one of these and
    the orchestrator's failure policy handles the error branch.
    """

    value: T | None = None
    error: FetchError | None = None

    @classmethod
    def ok(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def failed(cls, error: FetchError) -> FetchResult[T]:
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the value on success, ``default`` on failure."""
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]
