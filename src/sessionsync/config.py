"""Session sync configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DataSourceType(Enum):
    """Supported data source backends."""

    COSMOS_REST = "cosmos_rest"
    MOCK = "mock"


class EnricherType(Enum):
    """Supported validator enrichment producers."""

    KEYBASE = "keybase"
    NONE = "none"


@dataclass
class SyncConfig:
    """Configuration for FetchOrchestrator.

    Attributes:
        source: Data source backend.
        api_url: Base URL of the Cosmos LCD REST endpoint.
        request_timeout: Per-request HTTP timeout in seconds.
        transactions_page_size: Transactions requested per page.
        validators_page_limit: Maximum validators fetched in one call.
        enrichment: Validator enrichment producer.
        enrichment_chunk_size: Validators looked up per enrichment chunk.
        keybase_url: Base URL of the Keybase user lookup API.
        default_currency: Display currency used when the session has none.
        log_level: Root log level.
        log_json: Emit JSON structured log lines.
    """

    source: DataSourceType = DataSourceType.COSMOS_REST
    api_url: str = "https://api.cosmos.network"
    request_timeout: float = 10.0
    transactions_page_size: int = 20
    validators_page_limit: int = 500

    enrichment: EnricherType = EnricherType.KEYBASE
    enrichment_chunk_size: int = 20
    keybase_url: str = "https://keybase.io"

    default_currency: str = "USD"
    log_level: str = "INFO"
    log_json: bool = True
