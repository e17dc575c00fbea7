"""Trade records: raw swap events in, classified human-facing trades out."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from futarchy.domain.enums import OperationSide, OutcomeSide


class RawTrade(BaseModel):
    """One two-token swap event. Positive amount = received by the trader, negative = given.

    Amounts are raw 18-decimal integers kept as strings so malformed rows reach the classifier.
    """

    model_config = ConfigDict(frozen=True)

    token0: str | None = None
    token1: str | None = None
    amount0: str | None = None
    amount1: str | None = None
    token0_symbol: str | None = None
    token1_symbol: str | None = None
    timestamp: datetime | None = None
    pool_address: str | None = None
    transaction_hash: str | None = None
    block_number: int | None = None
    user_address: str | None = None
    proposal_id: str | None = None
    chain: str | int | None = None

    @field_validator("amount0", "amount1", mode="before")
    @classmethod
    def _amount_as_str(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class TradeToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str | None
    symbol: str
    amount: Decimal  # 6 decimal places


class ClassifiedTrade(BaseModel):
    """A priced trade from the user's perspective: token_in = received, token_out = given."""

    model_config = ConfigDict(frozen=True)

    token_in: TradeToken
    token_out: TradeToken
    outcome_side: OutcomeSide
    operation_side: OperationSide
    price: Decimal  # 4 decimal places
    timestamp: datetime
    pool_address: str | None = None
    block_number: int | None = None
    user_address: str | None = None
    transaction_link: str | None = None


class DateRange(BaseModel):
    start: datetime | None = None
    end: datetime | None = None


class TradeSummary(BaseModel):
    total_trades: int = 0
    outcomes: dict[OutcomeSide, int] = {side: 0 for side in OutcomeSide}
    operations: dict[OperationSide, int] = {side: 0 for side in OperationSide}
    date_range: DateRange = DateRange()
    unique_tokens: list[str] = []
    unique_pools: list[str] = []


class FormattedTrades(BaseModel):
    trades: list[ClassifiedTrade]
    count: int
    summary: TradeSummary
