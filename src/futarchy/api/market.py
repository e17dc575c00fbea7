from typing import Annotated

from fastapi import APIRouter, Depends

from futarchy.api.deps import get_registry_holder
from futarchy.api.schemas.market import MarketUpdateResponse, TokenRoleList
from futarchy.domain.models.market import MarketMetadata
from futarchy.tokens.registry import RegistryHolder

router = APIRouter(prefix="/api/market", tags=["market"])

HolderDep = Annotated[RegistryHolder, Depends(get_registry_holder)]


@router.put("", response_model=MarketUpdateResponse)
async def update_market(body: MarketMetadata, holder: HolderDep) -> MarketUpdateResponse:
    """Replace the market metadata; the token registry is rebuilt in place."""
    registry = holder.rebuild(body)
    return MarketUpdateResponse(market_id=registry.market_id, token_count=len(registry))


@router.get("/tokens", response_model=TokenRoleList)
async def list_tokens(holder: HolderDep) -> TokenRoleList:
    registry = holder.current
    tokens = registry.roles()
    return TokenRoleList(market_id=registry.market_id, tokens=tokens, total=len(tokens))
