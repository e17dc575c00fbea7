"""Supabase (PostgREST) client for the trade_history table."""

import logging
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from futarchy.domain.models.trade import RawTrade
from futarchy.exceptions import ExternalServiceError
from futarchy.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

TABLE = "trade_history"

# API field name -> trade_history column
ORDER_COLUMNS: dict[str, str] = {"timestamp": "evt_block_time"}


class TradeHistoryClient:
    def __init__(self, base_url: str, api_key: str, http_client: RateLimitedClient) -> None:
        if not base_url:
            raise ValueError("Supabase URL is required")
        self._url = f"{base_url.rstrip('/')}/rest/v1/{TABLE}"
        self._headers = {"apikey": api_key, "Authorization": f"Bearer {api_key}"}
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _query(self, params: dict[str, Any]) -> list[dict]:
        try:
            resp = await self._http.get(self._url, params=params, headers=self._headers)
        except httpx.TransportError as e:
            raise ExternalServiceError(f"Supabase request failed: {e}") from e

        if resp.status_code >= 500 or resp.status_code == 429:
            raise ExternalServiceError(f"Supabase error {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            # Bad filter/column: not retriable
            raise ValueError(f"Supabase query rejected ({resp.status_code}): {resp.text}")

        data = resp.json()
        if not isinstance(data, list):
            return []
        return data

    async def fetch_trades(
        self,
        user_address: str | None = None,
        proposal_id: str | None = None,
        limit: int | None = 100,
        order_by: str = "timestamp",
        ascending: bool = False,
    ) -> list[RawTrade]:
        params: dict[str, Any] = {"select": "*"}
        if user_address:
            params["user_address"] = f"eq.{user_address.lower()}"
        if proposal_id:
            # proposal_id keeps its stored case
            params["proposal_id"] = f"eq.{proposal_id}"
        column = ORDER_COLUMNS.get(order_by, order_by)
        params["order"] = f"{column}.{'asc' if ascending else 'desc'}"
        if limit:
            params["limit"] = limit

        rows = await self._query(params)
        logger.info(
            "Fetched %d trade rows (user=%s, proposal=%s)", len(rows), user_address or "all", proposal_id or "all",
        )
        return [row_to_raw_trade(row) for row in rows]


def row_to_raw_trade(row: dict) -> RawTrade:
    return RawTrade(
        token0=row.get("token0"),
        token1=row.get("token1"),
        amount0=row.get("amount0"),
        amount1=row.get("amount1"),
        token0_symbol=row.get("token0_symbol"),
        token1_symbol=row.get("token1_symbol"),
        timestamp=row.get("evt_block_time") or row.get("created_at"),
        pool_address=row.get("pool_id"),
        transaction_hash=row.get("evt_tx_hash"),
        block_number=row.get("evt_block_number"),
        user_address=row.get("user_address"),
        proposal_id=row.get("proposal_id"),
        chain=row.get("chain"),
    )
