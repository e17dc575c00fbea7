from pydantic import BaseModel

from futarchy.domain.models.token import TokenRole


class MarketUpdateResponse(BaseModel):
    market_id: str
    token_count: int


class TokenRoleList(BaseModel):
    market_id: str
    tokens: list[TokenRole]
    total: int
