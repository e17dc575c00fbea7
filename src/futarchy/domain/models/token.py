from pydantic import BaseModel, ConfigDict

from futarchy.domain.enums import TokenCategory, TokenSide


class TokenRole(BaseModel):
    """Semantic role of one token address within a market."""

    model_config = ConfigDict(frozen=True)

    address: str  # always lowercase
    category: TokenCategory
    side: TokenSide = TokenSide.NONE
    symbol: str = ""
    name: str = ""
    decimals: int = 18
    leg: TokenCategory | None = None  # base tokens only: which conditional leg they back

    @property
    def is_conditional(self) -> bool:
        return self.category in (TokenCategory.COMPANY, TokenCategory.CURRENCY)

    @property
    def is_base(self) -> bool:
        return self.category == TokenCategory.BASE
