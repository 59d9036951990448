"""Session state accessors — who is signed in and in which currency."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

DEFAULT_CURRENCY = "USD"


class BaseSessionProvider(ABC):
    """Read access to externally owned session state."""

    @abstractmethod
    def get_address(self) -> str | None:
        """Return the signed-in account address, or None when signed out."""
        ...

    def get_currency(self) -> str:
        """Return the preferred display currency."""
        return DEFAULT_CURRENCY


class StaticSessionProvider(BaseSessionProvider):
    """In-memory session, switched with ``sign_in`` / ``sign_out``."""

    def __init__(self, address: str | None = None, currency: str | None = None) -> None:
        self.address = address
        self.currency = currency

    def sign_in(self, address: str, currency: str | None = None) -> None:
        self.address = address
        if currency is not None:
            self.currency = currency

    def sign_out(self) -> None:
        self.address = None

    def get_address(self) -> str | None:
        return self.address or None

    def get_currency(self) -> str:
        return self.currency or DEFAULT_CURRENCY


class EnvSessionProvider(BaseSessionProvider):
    """Session read from ``SESSIONSYNC_ADDRESS`` / ``SESSIONSYNC_CURRENCY``.

    Values are read on every call so a process supervisor can switch
    accounts between refreshes.
    """

    def __init__(self, default_currency: str = DEFAULT_CURRENCY) -> None:
        self.default_currency = default_currency

    def get_address(self) -> str | None:
        return os.getenv("SESSIONSYNC_ADDRESS") or None

    def get_currency(self) -> str:
        return os.getenv("SESSIONSYNC_CURRENCY") or self.default_currency
