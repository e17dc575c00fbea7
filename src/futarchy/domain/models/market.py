"""Market metadata: the company/currency/base token table a proposal trades."""

import json
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TokenInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = Field(validation_alias=AliasChoices("address", "wrappedCollateralTokenAddress"))
    symbol: str = ""
    name: str = ""
    decimals: int = 18


class TokenSet(BaseModel):
    """YES/NO conditional tokens plus the base collateral they are split from."""

    model_config = ConfigDict(frozen=True)

    yes: TokenInfo | None = None
    no: TokenInfo | None = None
    base: TokenInfo | None = None


class MarketMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    market_id: str = Field(default="", validation_alias=AliasChoices("market_id", "marketId", "proposalAddress"))
    chain: str | int | None = None
    company_tokens: TokenSet = Field(
        default_factory=TokenSet, validation_alias=AliasChoices("company_tokens", "companyTokens"),
    )
    currency_tokens: TokenSet = Field(
        default_factory=TokenSet, validation_alias=AliasChoices("currency_tokens", "currencyTokens"),
    )


def load_metadata(path: str | Path) -> MarketMetadata:
    """Read market metadata from a JSON config file."""
    data = json.loads(Path(path).read_text())
    return MarketMetadata.model_validate(data)
