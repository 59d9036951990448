"""Session sync error types."""

from __future__ import annotations

from enum import Enum


class FetchErrorCode(Enum):
    """Error classification codes."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    SOURCE_ERROR = "source_error"


class FetchError(Exception):
    """Data source failure with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether re-invoking the fetch may succeed.
    """

    def __init__(
        self,
        message: str,
        code: FetchErrorCode = FetchErrorCode.SOURCE_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
