import pytest
from httpx import ASGITransport, AsyncClient

from factories import MARKET, market_payload
from futarchy.api.deps import get_registry_holder
from futarchy.api.main import app
from futarchy.tokens.registry import RegistryHolder


@pytest.fixture()
def holder():
    return RegistryHolder()


@pytest.fixture()
async def client(holder):
    app.dependency_overrides[get_registry_holder] = lambda: holder
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestMarketAPI:
    async def test_tokens_empty_before_metadata(self, client):
        res = await client.get("/api/market/tokens")
        assert res.status_code == 200
        assert res.json()["total"] == 0

    async def test_put_rebuilds_registry(self, client, holder):
        res = await client.put("/api/market", json=market_payload())
        assert res.status_code == 200
        assert res.json() == {"market_id": MARKET, "token_count": 6}
        assert len(holder.current) == 6

        res = await client.get("/api/market/tokens")
        data = res.json()
        assert data["market_id"] == MARKET
        assert data["total"] == 6
        categories = sorted(t["category"] for t in data["tokens"])
        assert categories == ["base", "base", "company", "company", "currency", "currency"]

    async def test_put_rejects_bad_payload(self, client):
        res = await client.put("/api/market", json={"companyTokens": {"yes": {"symbol": "YES_GNO"}}})
        assert res.status_code == 422
