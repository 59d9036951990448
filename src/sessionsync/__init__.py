"""sessionsync — session data synchronization for Cosmos account dashboards.

Fans out to a read-only chain data source, isolates each fetch's failure,
accumulates paginated transaction history and patches the validator set
as background enrichment chunks arrive, all into one immutable snapshot
a rendering layer can subscribe to.

Quick start::

    from sessionsync import create_orchestrator_from_env
    sync = create_orchestrator_from_env()
    await sync.refresh_all()
    sync.store.snapshot.balances
"""

from __future__ import annotations

import os

from sessionsync.config import DataSourceType, EnricherType, SyncConfig
from sessionsync.enrichment import (
    BaseValidatorEnricher,
    NoopEnricher,
    StaticEnricher,
    create_enricher,
)
from sessionsync.errors import FetchError, FetchErrorCode
from sessionsync.logging_config import setup_logging
from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.snapshot import SESSION_FIELDS, Snapshot
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.notifications import (
    CompositeNotificationSink,
    LoggingNotificationSink,
    MemoryNotificationSink,
    Notification,
    NotificationKind,
    NotificationSink,
)
from sessionsync.orchestrator import FetchOrchestrator
from sessionsync.pagination import merge_transaction_page, unique_by_key
from sessionsync.patcher import ValidatorPatcher, apply_validator_chunk
from sessionsync.result import FetchResult
from sessionsync.session import (
    BaseSessionProvider,
    EnvSessionProvider,
    StaticSessionProvider,
)
from sessionsync.sources import create_data_source
from sessionsync.sources.base import BaseDataSource
from sessionsync.store import SnapshotStore

__version__ = "0.1.0"

__all__ = [
    # Orchestrator
    "FetchOrchestrator",
    "create_orchestrator_from_env",
    # Store and merge logic
    "SnapshotStore",
    "merge_transaction_page",
    "unique_by_key",
    "apply_validator_chunk",
    "ValidatorPatcher",
    # Collaborators
    "BaseDataSource",
    "create_data_source",
    "BaseValidatorEnricher",
    "NoopEnricher",
    "StaticEnricher",
    "create_enricher",
    "BaseSessionProvider",
    "StaticSessionProvider",
    "EnvSessionProvider",
    "NotificationSink",
    "NotificationKind",
    "Notification",
    "LoggingNotificationSink",
    "MemoryNotificationSink",
    "CompositeNotificationSink",
    # Config
    "SyncConfig",
    "DataSourceType",
    "EnricherType",
    "setup_logging",
    # Errors
    "FetchError",
    "FetchErrorCode",
    "FetchResult",
    # Models
    "Block",
    "Balance",
    "Reward",
    "Delegation",
    "Undelegation",
    "Validator",
    "Proposal",
    "GovernanceOverview",
    "Transaction",
    "Snapshot",
    "SESSION_FIELDS",
]


def create_orchestrator_from_env() -> FetchOrchestrator:
    """Zero-config factory — reads the data source and session from env vars.

    Environment variables:
        SESSIONSYNC_SOURCE: Data source — "cosmos_rest" or "mock" (default: "cosmos_rest").
        SESSIONSYNC_API_URL: Cosmos LCD REST base URL.
        SESSIONSYNC_TIMEOUT: HTTP request timeout in seconds (default: 10).
        SESSIONSYNC_TX_PAGE_SIZE: Transactions per page (default: 20).
        SESSIONSYNC_ENRICHMENT: "keybase" or "none" (default: "keybase").
        SESSIONSYNC_ENRICHMENT_CHUNK: Validators per enrichment chunk (default: 20).
        SESSIONSYNC_ADDRESS: Signed-in account address, read on every refresh.
        SESSIONSYNC_CURRENCY: Display currency (default: "USD").
        SESSIONSYNC_LOG_LEVEL: Root log level (default: "INFO").
        SESSIONSYNC_LOG_JSON: "1" for JSON log lines, "0" for plain (default: "1").
    """
    config = SyncConfig(
        source=DataSourceType(os.getenv("SESSIONSYNC_SOURCE", "cosmos_rest")),
        api_url=os.getenv("SESSIONSYNC_API_URL", "https://api.cosmos.network"),
        request_timeout=float(os.getenv("SESSIONSYNC_TIMEOUT", "10")),
        transactions_page_size=int(os.getenv("SESSIONSYNC_TX_PAGE_SIZE", "20")),
        enrichment=EnricherType(os.getenv("SESSIONSYNC_ENRICHMENT", "keybase")),
        enrichment_chunk_size=int(os.getenv("SESSIONSYNC_ENRICHMENT_CHUNK", "20")),
        default_currency=os.getenv("SESSIONSYNC_CURRENCY", "USD"),
        log_level=os.getenv("SESSIONSYNC_LOG_LEVEL", "INFO"),
        log_json=os.getenv("SESSIONSYNC_LOG_JSON", "1") != "0",
    )
    setup_logging(config.log_level, config.log_json)

    return FetchOrchestrator.from_config(
        config,
        session=EnvSessionProvider(default_currency=config.default_currency),
    )
