"""Cosmos SDK LCD (REST) data source.

Talks to any Cosmos SDK node exposing the gRPC-gateway REST routes
(``/cosmos/...``) over ``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

import bech32
import httpx

from sessionsync.errors import FetchError, FetchErrorCode
from sessionsync.models.balance import Balance, Reward
from sessionsync.models.block import Block
from sessionsync.models.delegation import Delegation, Undelegation
from sessionsync.models.governance import GovernanceOverview, Proposal
from sessionsync.models.transaction import Transaction
from sessionsync.models.validator import Validator
from sessionsync.sources.base import BaseDataSource

logger = logging.getLogger(__name__)

_FRACTION_RE = re.compile(r"\.(\d+)")


class CosmosRestSource(BaseDataSource):
    """Fetch dashboard data from a Cosmos SDK REST endpoint.

    Pass ``client`` to share a pre-configured ``httpx.AsyncClient`` (its
    ``base_url`` must point at the node); otherwise one is created and
    closed by ``close()``.
    """

    def __init__(
        self,
        api_url: str = "https://api.cosmos.network",
        timeout: float = 10.0,
        transactions_page_size: int = 20,
        validators_page_limit: int = 500,
        staking_denom: str = "uatom",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.transactions_page_size = transactions_page_size
        self.validators_page_limit = validators_page_limit
        self.staking_denom = staking_denom
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=self.api_url, timeout=timeout)

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    # ----------------------------------------------------------------- chain

    async def get_block(self) -> Block:
        data = await self._get("/cosmos/base/tendermint/v1beta1/blocks/latest")
        return self._parse("block", self._to_block, data)

    # --------------------------------------------------------------- account

    async def get_balances(self, address: str, currency: str) -> list[Balance]:
        coins = await self._get_all(f"/cosmos/bank/v1beta1/balances/{address}", "balances")
        return self._parse(
            "balances",
            lambda rows: [
                Balance(denom=c["denom"], amount=float(c["amount"]), currency=currency)
                for c in rows
            ],
            coins,
        )

    async def get_rewards(self, address: str, currency: str) -> list[Reward]:
        data = await self._get(
            f"/cosmos/distribution/v1beta1/delegators/{address}/rewards"
        )
        return self._parse(
            "rewards",
            lambda d: [
                Reward(
                    validator_address=r["validator_address"],
                    denom=c["denom"],
                    amount=float(c["amount"]),
                    currency=currency,
                )
                for r in d.get("rewards") or []
                for c in r.get("reward") or []
            ],
            data,
        )

    async def get_delegations_for_delegator(self, address: str) -> list[Delegation]:
        rows = await self._get_all(
            f"/cosmos/staking/v1beta1/delegations/{address}", "delegation_responses",
        )
        return self._parse("delegations", self._to_delegations, rows)

    async def get_undelegations_for_delegator(self, address: str) -> list[Undelegation]:
        rows = await self._get_all(
            f"/cosmos/staking/v1beta1/delegators/{address}/unbonding_delegations",
            "unbonding_responses",
        )
        return self._parse("undelegations", self._to_undelegations, rows)

    async def get_transactions(self, address: str, page_number: int) -> list[Transaction]:
        params = {
            "events": f"message.sender='{address}'",
            "pagination.offset": page_number * self.transactions_page_size,
            "pagination.limit": self.transactions_page_size,
            "order_by": "ORDER_BY_DESC",
        }
        data = await self._get("/cosmos/tx/v1beta1/txs", params)
        return self._parse(
            "transactions",
            lambda d: [self._to_transaction(t) for t in d.get("tx_responses") or []],
            data,
        )

    # --------------------------------------------------------------- staking

    async def get_validators(self) -> list[Validator]:
        rows = await self._get_all(
            "/cosmos/staking/v1beta1/validators",
            "validators",
            {"pagination.limit": self.validators_page_limit},
        )
        return self._parse(
            "validators", lambda rs: [self._to_validator(v) for v in rs], rows,
        )

    async def get_validator_delegations(self, validator: Validator) -> list[Delegation]:
        rows = await self._get_all(
            f"/cosmos/staking/v1beta1/validators/{validator.operator_address}/delegations",
            "delegation_responses",
        )
        return self._parse("validator delegations", self._to_delegations, rows)

    async def get_self_stake(self, validator: Validator) -> float:
        """Return the operator account's own delegation to ``validator``.

        A validator whose operator never self-delegated answers 404, which
        counts as zero stake.
        """
        account = _account_address(validator.operator_address)
        try:
            data = await self._get(
                f"/cosmos/staking/v1beta1/validators/{validator.operator_address}"
                f"/delegations/{account}"
            )
        except FetchError as exc:
            if exc.code is FetchErrorCode.NOT_FOUND:
                return 0.0
            raise
        return self._parse(
            "self stake",
            lambda d: float(d["delegation_response"]["balance"]["amount"]),
            data,
        )

    # ------------------------------------------------------------ governance

    async def get_proposals(self, validators: list[Validator]) -> list[Proposal]:
        rows = await self._get_all(
            "/cosmos/gov/v1beta1/proposals",
            "proposals",
            {"pagination.reverse": "true"},
        )
        bonded = sum(v.tokens for v in validators if v.is_bonded)
        return self._parse(
            "proposals", lambda rs: [self._to_proposal(p, bonded) for p in rs], rows,
        )

    async def get_governance_overview(self) -> GovernanceOverview:
        pool = await self._get("/cosmos/staking/v1beta1/pool")
        community = await self._get("/cosmos/distribution/v1beta1/community_pool")
        tallying = await self._get("/cosmos/gov/v1beta1/params/tallying")

        def build(_: Any) -> GovernanceOverview:
            params = tallying["tally_params"]
            community_amount = next(
                (
                    float(c["amount"]) for c in community.get("pool") or []
                    if c["denom"] == self.staking_denom
                ),
                None,
            )
            return GovernanceOverview(
                total_staked=float(pool["pool"]["bonded_tokens"]),
                community_pool=community_amount,
                quorum=_optional_float(params.get("quorum")),
                threshold=_optional_float(params.get("threshold")),
                veto_threshold=_optional_float(params.get("veto_threshold")),
            )

        return self._parse("governance overview", build, None)

    # -------------------------------------------------------------- helpers

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        logger.debug("GET %s %s", path, params or "")
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Request to {path} timed out",
                code=FetchErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                code = FetchErrorCode.NOT_FOUND
            elif status == 429:
                code = FetchErrorCode.RATE_LIMITED
            else:
                code = FetchErrorCode.TRANSPORT
            raise FetchError(
                f"{path} returned HTTP {status}",
                code=code,
                retryable=status == 429 or status >= 500,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Request to {path} failed: {exc}",
                code=FetchErrorCode.TRANSPORT,
                retryable=True,
            ) from exc
        except ValueError as exc:
            raise FetchError(
                f"{path} returned invalid JSON",
                code=FetchErrorCode.INVALID_RESPONSE,
            ) from exc

    async def _get_all(
        self, path: str, key: str, params: dict[str, Any] | None = None,
    ) -> list[Any]:
        """GET every page of a key-paginated list endpoint.

        Follows ``pagination.next_key`` until the node returns an empty one
        and concatenates the ``key`` arrays of all pages.
        """
        params = dict(params or {})
        rows: list[Any] = []
        while True:
            data = await self._get(path, params)
            page, next_key = self._parse(
                key, lambda d: (d[key], (d.get("pagination") or {}).get("next_key")), data,
            )
            rows.extend(page)
            if not next_key:
                return rows
            logger.debug("Following %s to next page (%d rows so far)", path, len(rows))
            params["pagination.key"] = next_key

    @staticmethod
    def _parse(what: str, build: Any, data: Any) -> Any:
        try:
            return build(data)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FetchError(
                f"Unexpected {what} payload: {exc!r}",
                code=FetchErrorCode.INVALID_RESPONSE,
            ) from exc

    @staticmethod
    def _to_block(data: dict[str, Any]) -> Block:
        header = (data.get("block") or data["sdk_block"])["header"]
        return Block(
            height=int(header["height"]),
            chain_id=header["chain_id"],
            hash=(data.get("block_id") or {}).get("hash"),
            time=_parse_time(header.get("time")),
            proposer_address=header.get("proposer_address"),
        )

    @staticmethod
    def _to_delegations(rows: list[dict[str, Any]]) -> list[Delegation]:
        return [
            Delegation(
                delegator_address=r["delegation"]["delegator_address"],
                validator_address=r["delegation"]["validator_address"],
                denom=r["balance"]["denom"],
                amount=float(r["balance"]["amount"]),
                shares=_optional_float(r["delegation"].get("shares")),
            )
            for r in rows
        ]

    def _to_undelegations(self, rows: list[dict[str, Any]]) -> list[Undelegation]:
        return [
            Undelegation(
                delegator_address=r["delegator_address"],
                validator_address=r["validator_address"],
                denom=self.staking_denom,
                amount=float(entry["balance"]),
                completion_time=_parse_time(entry.get("completion_time")),
                creation_height=int(entry["creation_height"]),
            )
            for r in rows
            for entry in r["entries"]
        ]

    @staticmethod
    def _to_transaction(data: dict[str, Any]) -> Transaction:
        tx = data.get("tx") or {}
        messages = (tx.get("body") or {}).get("messages") or []
        fee_coins = ((tx.get("auth_info") or {}).get("fee") or {}).get("amount") or []
        msg_type = messages[0].get("@type", "").rsplit(".", 1)[-1] if messages else None
        return Transaction(
            key=data["txhash"],
            hash=data["txhash"],
            height=int(data["height"]) if data.get("height") else None,
            timestamp=_parse_time(data.get("timestamp")),
            type=msg_type or None,
            success=int(data.get("code") or 0) == 0,
            memo=(tx.get("body") or {}).get("memo") or "",
            fee={c["denom"]: float(c["amount"]) for c in fee_coins} or None,
        )

    @staticmethod
    def _to_validator(data: dict[str, Any]) -> Validator:
        description = data.get("description") or {}
        rates = (data.get("commission") or {}).get("commission_rates") or {}
        return Validator(
            operator_address=data["operator_address"],
            name=description.get("moniker") or "",
            identity=description.get("identity") or None,
            website=description.get("website") or None,
            details=description.get("details") or None,
            status=data.get("status"),
            jailed=bool(data.get("jailed", False)),
            tokens=float(data.get("tokens") or 0),
            commission=_optional_float(rates.get("rate")),
        )

    @staticmethod
    def _to_proposal(data: dict[str, Any], bonded: float) -> Proposal:
        content = data.get("content") or {}
        raw_tally = data.get("final_tally_result") or {}
        tally = {option: float(votes) for option, votes in raw_tally.items()}
        voted = sum(tally.values())
        return Proposal(
            proposal_id=int(data["proposal_id"]),
            title=content.get("title") or "",
            description=content.get("description") or "",
            status=data.get("status"),
            submit_time=_parse_time(data.get("submit_time")),
            voting_end_time=_parse_time(data.get("voting_end_time")),
            tally=tally or None,
            turnout=voted / bonded if bonded > 0 else None,
        )


def _account_address(operator_address: str) -> str:
    """Map a ``<prefix>valoper1...`` operator address to its account address.

    Both encode the same key hash; only the human-readable part differs.
    """
    hrp, data = bech32.bech32_decode(operator_address)
    if hrp is None or data is None or not hrp.endswith("valoper"):
        raise FetchError(
            f"Not a validator operator address: {operator_address}",
            code=FetchErrorCode.SOURCE_ERROR,
        )
    return bech32.bech32_encode(hrp[: -len("valoper")], data)

def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _parse_time(value: str | None) -> datetime | None:
    """Parse RFC 3339 timestamps, trimming nanoseconds to microseconds."""
    if not value:
        return None
    value = value.replace("Z", "+00:00")
    value = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return datetime.fromisoformat(value)
