"""FetchOrchestrator — concurrent fetches with per-fetch failure isolation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sessionsync.config import DataSourceType, SyncConfig
from sessionsync.enrichment import BaseValidatorEnricher, NoopEnricher, create_enricher
from sessionsync.errors import FetchError, FetchErrorCode
from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.notifications import (
    LoggingNotificationSink,
    NotificationKind,
    NotificationSink,
)
from sessionsync.patcher import ValidatorPatcher
from sessionsync.result import FetchResult
from sessionsync.session import DEFAULT_CURRENCY, BaseSessionProvider, StaticSessionProvider
from sessionsync.sources import create_data_source
from sessionsync.sources.base import BaseDataSource
from sessionsync.store import SnapshotStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchOrchestrator:
    """Central coordinator: data source -> snapshot store, with failure isolation.

    Every fetcher issues exactly one data source call. On success it
    commits to the store; on failure it reports ``"<Action> failed: <cause>"``
    to the notification sink once and returns normally, so a failing fetch
    never blocks, cancels or fails its siblings.

    Usage::

        async with FetchOrchestrator.from_config(config, session=session) as sync:
            await sync.refresh_all()
            sync.store.snapshot.balances
    """

    def __init__(
        self,
        source: BaseDataSource,
        store: SnapshotStore | None = None,
        notifications: NotificationSink | None = None,
        session: BaseSessionProvider | None = None,
        enricher: BaseValidatorEnricher | None = None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.source = source
        self.store = store or SnapshotStore()
        self.notifications = notifications or LoggingNotificationSink()
        self.session = session or StaticSessionProvider()
        self.enricher = enricher or NoopEnricher()
        self.default_currency = default_currency

        self._enrichment_tasks: set[asyncio.Task[None]] = set()
        self._transaction_pages_loaded = 0

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        *,
        store: SnapshotStore | None = None,
        notifications: NotificationSink | None = None,
        session: BaseSessionProvider | None = None,
    ) -> FetchOrchestrator:
        """Build the data source and enricher selected by ``config``."""
        kwargs: dict[str, Any] = {}
        if config.source is DataSourceType.COSMOS_REST:
            kwargs["api_url"] = config.api_url
            kwargs["timeout"] = config.request_timeout
            kwargs["transactions_page_size"] = config.transactions_page_size
            kwargs["validators_page_limit"] = config.validators_page_limit
        return cls(
            source=create_data_source(config.source, **kwargs),
            store=store,
            notifications=notifications,
            session=session,
            enricher=create_enricher(config),
            default_currency=config.default_currency,
        )

    async def __aenter__(self) -> FetchOrchestrator:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------ batches

    async def refresh_all(self) -> None:
        """Refresh validators, the latest block and the session data together."""
        await asyncio.gather(
            self.get_validators(),
            self.get_block(),
            self.refresh_session(),
        )

    async def refresh_session(self) -> None:
        """Refresh every account-scoped field; no-op when signed out."""
        address = self.session.get_address()
        if not address:
            logger.debug("No session address, skipping session refresh")
            return
        currency = self.session.get_currency() or self.default_currency
        await asyncio.gather(
            self.get_balances(address, currency),
            self.get_rewards(address, currency),
            self.get_transactions(address),
            self.get_delegations(address),
            self.get_undelegations(address),
        )

    def reset_session(self) -> None:
        """Forget the signed-in account's data (on logout)."""
        self.store.reset_session()
        self._transaction_pages_loaded = 0

    # -------------------------------------------------------------- chain

    async def get_block(self) -> FetchResult[Block]:
        result = await self._fetch("Getting block", self.source.get_block)
        if result.is_ok:
            self.store.set_block(result.value)
        return result

    # ------------------------------------------------------------ account

    async def get_balances(self, address: str, currency: str) -> FetchResult[list[Balance]]:
        result = await self._fetch(
            "Getting balances", self.source.get_balances, address, currency,
        )
        if result.is_ok:
            self.store.set_balances(result.value)
            self.store.set_balances_loaded(True)
        return result

    async def get_rewards(self, address: str, currency: str) -> FetchResult[list[Reward]]:
        result = await self._fetch(
            "Getting rewards", self.source.get_rewards, address, currency,
        )
        if result.is_ok:
            self.store.set_rewards(result.value)
        return result

    async def get_delegations(self, address: str) -> FetchResult[list[Delegation]]:
        result = await self._fetch(
            "Getting delegations", self.source.get_delegations_for_delegator, address,
        )
        if result.is_ok:
            self.store.set_delegations(result.value)
        return result

    async def get_undelegations(self, address: str) -> FetchResult[list[Undelegation]]:
        result = await self._fetch(
            "Getting undelegations", self.source.get_undelegations_for_delegator, address,
        )
        if result.is_ok:
            self.store.set_undelegations(result.value)
        return result

    async def get_transactions(
        self, address: str, page_number: int = 0,
    ) -> FetchResult[list[Transaction]]:
        """Fetch one transaction page; page 0 replaces the history."""
        result = await self._fetch(
            "Getting transactions", self.source.get_transactions, address, page_number,
        )
        if result.is_ok:
            self.store.merge_transaction_page(result.value, page_number)
            self._transaction_pages_loaded = page_number + 1
        return result

    async def load_more_transactions(self) -> FetchResult[list[Transaction]] | None:
        """Fetch the page after the last one merged.

        Returns None without fetching when signed out or when the last
        page came back empty.
        """
        address = self.session.get_address()
        if not address or not self.store.snapshot.more_transactions_available:
            return None
        return await self.get_transactions(address, self._transaction_pages_loaded)

    # ------------------------------------------------------------ staking

    async def get_validators(self) -> FetchResult[list[Validator]]:
        """Fetch the validator set, then start image enrichment in the background.

        Enrichment starts whether or not the fetch succeeded and patches
        whatever validator list is current when each chunk arrives.
        """
        result = await self._fetch("Getting validators", self.source.get_validators)
        if result.is_ok:
            self.store.set_validators(result.value)
        self._start_enrichment()
        return result

    async def get_validator_self_stake(self, validator: Validator) -> float:
        result = await self._fetch(
            "Getting validator self stake", self.source.get_self_stake, validator,
        )
        return result.unwrap_or(0)

    async def get_validator_delegations(self, validator: Validator) -> list[Delegation]:
        result = await self._fetch(
            "Getting delegations to validator",
            self.source.get_validator_delegations,
            validator,
        )
        return result.unwrap_or([])

    # --------------------------------------------------------- governance

    async def get_proposals(self) -> FetchResult[list[Proposal]]:
        validators = list(self.store.snapshot.validators)
        result = await self._fetch(
            "Getting proposals", self.source.get_proposals, validators,
        )
        if result.is_ok:
            self.store.set_proposals(result.value)
        return result

    async def get_governance_overview(self) -> FetchResult[GovernanceOverview]:
        result = await self._fetch(
            "Getting governance overview", self.source.get_governance_overview,
        )
        if result.is_ok:
            self.store.set_governance_overview(result.value)
        return result

    # --------------------------------------------------------- enrichment

    async def wait_for_enrichment(self) -> None:
        """Wait until every enrichment run started so far has finished."""
        while self._enrichment_tasks:
            await asyncio.gather(*list(self._enrichment_tasks))

    def _start_enrichment(self) -> None:
        task = asyncio.create_task(self._update_validator_images())
        self._enrichment_tasks.add(task)
        task.add_done_callback(self._enrichment_tasks.discard)

    async def _update_validator_images(self) -> None:
        validators = list(self.store.snapshot.validators)
        patcher = ValidatorPatcher(self.store)
        try:
            await self.enricher.enrich(validators, patcher)
        except Exception as exc:
            self._report_failure("Updating validator images", _as_fetch_error(exc))
            return
        logger.debug("Validator enrichment applied %d chunks", patcher.chunks_applied)

    # ----------------------------------------------------------- lifecycle

    async def close(self) -> None:
        """Let running enrichment finish, then release transports."""
        await self.wait_for_enrichment()
        await self.enricher.close()
        await self.source.close()

    # ------------------------------------------------------------ internal

    async def _fetch(
        self,
        action: str,
        call: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> FetchResult[T]:
        """Run one data source call and fold any failure into the result."""
        try:
            return FetchResult.ok(await call(*args))
        except Exception as exc:
            error = _as_fetch_error(exc)
        self._report_failure(action, error)
        return FetchResult.failed(error)

    def _report_failure(self, action: str, error: FetchError) -> None:
        message = f"{action} failed: {error.message}"
        logger.warning(message, extra={"error_code": error.code.value})
        self.notifications.report(NotificationKind.FAILURE, message)


def _as_fetch_error(exc: Exception) -> FetchError:
    if isinstance(exc, FetchError):
        return exc
    error = FetchError(str(exc) or type(exc).__name__, code=FetchErrorCode.SOURCE_ERROR)
    error.__cause__ = exc
    return error
