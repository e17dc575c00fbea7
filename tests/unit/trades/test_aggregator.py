from datetime import timedelta

from factories import NO_SDAI, POOL, SDAI, TRADE_TIME, UNKNOWN_TOKEN, YES_GNO, YES_SDAI, raw_trade, wei
from futarchy.domain.enums import OperationSide, OutcomeSide
from futarchy.trades.aggregator import summarize
from futarchy.trades.classifier import TradeClassifier


def _trades(registry):
    raws = [
        raw_trade(YES_GNO, wei("10"), YES_SDAI, wei("-1.5"), timestamp=TRADE_TIME),
        raw_trade(NO_SDAI, wei("-2"), SDAI, wei("1"), timestamp=TRADE_TIME - timedelta(days=2)),
        raw_trade(UNKNOWN_TOKEN, wei("1"), SDAI, wei("-1"), timestamp=TRADE_TIME + timedelta(hours=1), pool_address=None),
        raw_trade(YES_GNO, None, YES_SDAI, wei("1"), timestamp=TRADE_TIME, pool_address="0xotherpool"),
    ]
    return TradeClassifier().classify_many(raws, registry)


class TestSummarize:
    def test_totals_add_up(self, registry):
        trades = _trades(registry)
        summary = summarize(trades)

        assert summary.total_trades == len(trades) == 4
        assert sum(summary.outcomes.values()) == 4
        assert sum(summary.operations.values()) == 4

    def test_histograms(self, registry):
        summary = summarize(_trades(registry))

        assert summary.outcomes[OutcomeSide.YES] == 1
        assert summary.outcomes[OutcomeSide.NO] == 1
        assert summary.outcomes[OutcomeSide.NEUTRAL] == 2
        assert summary.operations[OperationSide.BUY] == 2
        assert summary.operations[OperationSide.SELL] == 2

    def test_date_range(self, registry):
        summary = summarize(_trades(registry))
        assert summary.date_range.start == TRADE_TIME - timedelta(days=2)
        assert summary.date_range.end == TRADE_TIME + timedelta(hours=1)

    def test_unique_tokens_and_pools_in_first_seen_order(self, registry):
        summary = summarize(_trades(registry))
        assert summary.unique_tokens == ["YES_GNO", "YES_sDAI", "sDAI", "NO_sDAI", "0x777777..."]
        assert summary.unique_pools == [POOL, "0xotherpool"]

    def test_empty(self):
        summary = summarize([])
        assert summary.total_trades == 0
        assert all(v == 0 for v in summary.outcomes.values())
        assert all(v == 0 for v in summary.operations.values())
        assert summary.date_range.start is None
        assert summary.date_range.end is None
        assert summary.unique_tokens == []
        assert summary.unique_pools == []
