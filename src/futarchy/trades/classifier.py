"""TradeClassifier: raw two-token swap record → priced, user-facing trade."""

import logging
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from futarchy.domain.enums import OperationSide, OutcomeSide
from futarchy.domain.models.trade import ClassifiedTrade, RawTrade, TradeToken
from futarchy.tokens.registry import TokenRegistry
from futarchy.tokens.symbols import outcome_from_symbol, short_address
from futarchy.trades.links import transaction_link
from futarchy.trades.pricing import TradeLeg, calculate_price, operation_side

logger = logging.getLogger(__name__)

TOKEN_DECIMALS = 18
AMOUNT_QUANTUM = Decimal("0.000001")
PRICE_QUANTUM = Decimal("0.0001")
# uint256 has 78 digits, plus the quantized places
QUANTIZE_PRECISION = 90


class TradeClassifier:
    """Pure function over (registry, raw trade). Never raises on malformed rows."""

    def __init__(self, default_chain: str | int = "gnosis") -> None:
        self._default_chain = default_chain

    def classify(self, raw: RawTrade, registry: TokenRegistry) -> ClassifiedTrade:
        try:
            amount0 = _parse_amount(raw.amount0)
            amount1 = _parse_amount(raw.amount1)
        except (ArithmeticError, ValueError) as e:
            logger.warning("Malformed amounts in trade %s: %s", raw.transaction_hash, e)
            return self._fallback(raw, registry)

        slot0 = _leg(raw.token0, raw.token0_symbol, amount0, registry)
        slot1 = _leg(raw.token1, raw.token1_symbol, amount1, registry)

        # amount0 > 0: the trader received token0
        token_in, token_out = (slot0, slot1) if amount0 > 0 else (slot1, slot0)

        try:
            priced = {
                "token_in": _trade_token(token_in),
                "token_out": _trade_token(token_out),
                "price": _quantize(calculate_price(token_in, token_out), PRICE_QUANTUM),
            }
        except ArithmeticError as e:
            logger.warning("Could not price trade %s: %s", raw.transaction_hash, e)
            return self._fallback(raw, registry)

        return ClassifiedTrade(
            outcome_side=outcome_side(token_in.symbol, token_out.symbol),
            operation_side=operation_side(token_in, token_out),
            **priced,
            **self._passthrough(raw),
        )

    def classify_many(self, raws: list[RawTrade], registry: TokenRegistry) -> list[ClassifiedTrade]:
        return [self.classify(raw, registry) for raw in raws]

    def _fallback(self, raw: RawTrade, registry: TokenRegistry) -> ClassifiedTrade:
        token_in = _leg(raw.token0, raw.token0_symbol, Decimal(0), registry)
        token_out = _leg(raw.token1, raw.token1_symbol, Decimal(0), registry)
        return ClassifiedTrade(
            token_in=_trade_token(token_in),
            token_out=_trade_token(token_out),
            outcome_side=OutcomeSide.NEUTRAL,
            operation_side=OperationSide.SELL,
            price=_quantize(Decimal(0), PRICE_QUANTUM),
            **self._passthrough(raw),
        )

    def _passthrough(self, raw: RawTrade) -> dict:
        return {
            "timestamp": raw.timestamp or datetime.now(UTC),
            "pool_address": raw.pool_address,
            "block_number": raw.block_number,
            "user_address": raw.user_address,
            "transaction_link": transaction_link(raw.transaction_hash, raw.chain or self._default_chain),
        }


def outcome_side(symbol_in: str | None, symbol_out: str | None) -> OutcomeSide:
    """First YES/NO hit wins, token_in checked before token_out."""
    return outcome_from_symbol(symbol_in) or outcome_from_symbol(symbol_out) or OutcomeSide.NEUTRAL


def _parse_amount(value: str | None) -> Decimal:
    """Raw 18-decimal integer string → signed token units."""
    if value is None or value == "":
        raise ValueError("amount is missing")
    amount = Decimal(value.strip())
    if not amount.is_finite():
        raise ValueError(f"amount is not finite: {value}")
    return amount / Decimal(10) ** TOKEN_DECIMALS


def _leg(address: str | None, symbol: str | None, amount: Decimal, registry: TokenRegistry) -> TradeLeg:
    role = registry.classify(address)
    resolved_symbol = (role.symbol if role is not None and role.symbol else None) or symbol or short_address(address)
    return TradeLeg(address=address, symbol=resolved_symbol, amount=abs(amount), role=role)


def _trade_token(leg: TradeLeg) -> TradeToken:
    return TradeToken(address=leg.address, symbol=leg.symbol, amount=_quantize(leg.amount, AMOUNT_QUANTUM))


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = QUANTIZE_PRECISION
        return value.quantize(quantum, rounding=ROUND_HALF_UP)
