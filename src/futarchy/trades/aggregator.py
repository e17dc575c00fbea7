"""Fold classified trades into summary statistics."""

from datetime import datetime

from futarchy.domain.enums import OperationSide, OutcomeSide
from futarchy.domain.models.trade import ClassifiedTrade, DateRange, TradeSummary


def summarize(trades: list[ClassifiedTrade]) -> TradeSummary:
    """Single pass over trades. Empty input gives an all-zero summary."""
    outcomes = {side: 0 for side in OutcomeSide}
    operations = {side: 0 for side in OperationSide}
    start: datetime | None = None
    end: datetime | None = None
    tokens: dict[str, None] = {}  # insertion-ordered set
    pools: dict[str, None] = {}

    for trade in trades:
        outcomes[trade.outcome_side] += 1
        operations[trade.operation_side] += 1

        if start is None or trade.timestamp < start:
            start = trade.timestamp
        if end is None or trade.timestamp > end:
            end = trade.timestamp

        tokens.setdefault(trade.token_in.symbol)
        tokens.setdefault(trade.token_out.symbol)
        if trade.pool_address:
            pools.setdefault(trade.pool_address)

    return TradeSummary(
        total_trades=len(trades),
        outcomes=outcomes,
        operations=operations,
        date_range=DateRange(start=start, end=end),
        unique_tokens=list(tokens),
        unique_pools=list(pools),
    )
