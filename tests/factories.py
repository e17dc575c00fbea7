"""Shared addresses and builders for tests."""

from datetime import UTC, datetime
from decimal import Decimal

from futarchy.domain.models.trade import RawTrade

YES_GNO = "0x1111111111111111111111111111111111111111"
NO_GNO = "0x2222222222222222222222222222222222222222"
GNO = "0x3333333333333333333333333333333333333333"
YES_SDAI = "0x4444444444444444444444444444444444444444"
NO_SDAI = "0x5555555555555555555555555555555555555555"
SDAI = "0x6666666666666666666666666666666666666666"
UNKNOWN_TOKEN = "0x7777777777777777777777777777777777777777"
USER = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
MARKET = "0x9999999999999999999999999999999999999999"
POOL = "0x8888888888888888888888888888888888888888"
TX_HASH = "0x" + "ab" * 32

TRADE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

WEI = Decimal(10) ** 18


def market_payload() -> dict:
    """Market metadata as the frontend config ships it (camelCase)."""
    return {
        "marketId": MARKET,
        "chain": 100,
        "companyTokens": {
            "yes": {"wrappedCollateralTokenAddress": YES_GNO, "symbol": "YES_GNO", "name": "Yes GNO"},
            "no": {"wrappedCollateralTokenAddress": NO_GNO, "symbol": "NO_GNO", "name": "No GNO"},
            "base": {"address": GNO, "symbol": "GNO", "name": "Gnosis"},
        },
        "currencyTokens": {
            "yes": {"wrappedCollateralTokenAddress": YES_SDAI, "symbol": "YES_sDAI", "name": "Yes sDAI"},
            "no": {"wrappedCollateralTokenAddress": NO_SDAI, "symbol": "NO_sDAI", "name": "No sDAI"},
            "base": {"address": SDAI, "symbol": "sDAI", "name": "Savings xDAI"},
        },
    }


def wei(amount: str) -> str:
    """Token units -> raw 18-decimal integer string."""
    return str(int(Decimal(amount) * WEI))


def raw_trade(
    token0: str,
    amount0: str,
    token1: str,
    amount1: str,
    token0_symbol: str | None = None,
    token1_symbol: str | None = None,
    **overrides,
) -> RawTrade:
    fields = {
        "token0": token0,
        "token1": token1,
        "amount0": amount0,
        "amount1": amount1,
        "token0_symbol": token0_symbol,
        "token1_symbol": token1_symbol,
        "timestamp": TRADE_TIME,
        "pool_address": POOL,
        "transaction_hash": TX_HASH,
        "block_number": 40_000_000,
        "user_address": USER,
    }
    fields.update(overrides)
    return RawTrade(**fields)
