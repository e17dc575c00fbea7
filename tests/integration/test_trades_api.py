from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from factories import USER, YES_GNO, YES_SDAI, raw_trade, wei
from futarchy.api.deps import get_trade_service
from futarchy.api.main import app
from futarchy.exceptions import ExternalServiceError
from futarchy.tokens.metadata import TokenInfoCache
from futarchy.trades.service import TradeHistoryService


@pytest.fixture()
def history_client():
    client = AsyncMock()
    client.fetch_trades.return_value = [
        raw_trade(YES_GNO, wei("-8784.95103735"), YES_SDAI, wei("1000")),
        raw_trade(YES_GNO, wei("10"), YES_SDAI, wei("-1.5"), transaction_hash="0xdef_1"),
    ]
    return client


@pytest.fixture()
async def client(history_client, registry_holder):
    service = TradeHistoryService(history_client, registry_holder, TokenInfoCache())
    app.dependency_overrides[get_trade_service] = lambda: service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestTradesAPI:
    async def test_health(self, client):
        res = await client.get("/api/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"

    async def test_list_trades(self, client, history_client):
        res = await client.get("/api/trades", params={"user_address": USER, "limit": 20})
        assert res.status_code == 200
        data = res.json()

        assert data["count"] == 2
        first = data["trades"][0]
        assert first["token_in"]["symbol"] == "YES_sDAI"
        assert first["token_out"]["symbol"] == "YES_GNO"
        assert first["operation_side"] == "sell"
        assert first["outcome_side"] == "yes"
        assert first["price"] == "0.1138"
        assert data["trades"][1]["transaction_link"] == "https://gnosisscan.io/tx/0xdef"
        assert data["summary"]["total_trades"] == 2
        assert history_client.fetch_trades.await_args.kwargs["limit"] == 20

    async def test_summary(self, client):
        res = await client.get("/api/trades/summary")
        assert res.status_code == 200
        data = res.json()
        assert data["total_trades"] == 2
        assert data["operations"] == {"buy": 1, "sell": 1}
        assert data["outcomes"] == {"yes": 2, "no": 0, "neutral": 0}

    async def test_limit_validation(self, client):
        res = await client.get("/api/trades", params={"limit": 0})
        assert res.status_code == 422

    async def test_upstream_failure(self, client, history_client):
        history_client.fetch_trades.side_effect = ExternalServiceError("Supabase error 503")
        res = await client.get("/api/trades")
        assert res.status_code == 502
        assert "503" in res.json()["detail"]
