import pytest

from factories import market_payload
from futarchy.domain.models.market import MarketMetadata
from futarchy.tokens.registry import RegistryHolder, TokenRegistry


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def metadata() -> MarketMetadata:
    return MarketMetadata.model_validate(market_payload())


@pytest.fixture()
def registry(metadata) -> TokenRegistry:
    return TokenRegistry.build(metadata)


@pytest.fixture()
def registry_holder(metadata) -> RegistryHolder:
    return RegistryHolder(metadata)
