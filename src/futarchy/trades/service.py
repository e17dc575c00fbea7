"""TradeHistoryService: fetch, enrich, classify and summarize trade history."""

import logging

from futarchy.domain.models.trade import ClassifiedTrade, FormattedTrades, RawTrade, TradeSummary
from futarchy.infra.supabase.trade_history_client import TradeHistoryClient
from futarchy.tokens.metadata import TokenInfoCache
from futarchy.tokens.registry import RegistryHolder, TokenRegistry
from futarchy.trades.aggregator import summarize
from futarchy.trades.classifier import TradeClassifier

logger = logging.getLogger(__name__)


class TradeHistoryService:
    def __init__(
        self,
        client: TradeHistoryClient,
        registry_holder: RegistryHolder,
        token_cache: TokenInfoCache,
        classifier: TradeClassifier | None = None,
    ) -> None:
        self._client = client
        self._registry_holder = registry_holder
        self._token_cache = token_cache
        self._classifier = classifier or TradeClassifier()

    async def formatted_trades(
        self,
        user_address: str | None = None,
        proposal_id: str | None = None,
        limit: int | None = 100,
        ascending: bool = False,
    ) -> FormattedTrades:
        raws = await self._client.fetch_trades(
            user_address=user_address, proposal_id=proposal_id, limit=limit, ascending=ascending,
        )
        # One snapshot for the whole batch
        registry = self._registry_holder.current
        enriched = await self._with_symbols(raws, registry)
        trades = self._classifier.classify_many(enriched, registry)
        logger.info("Classified %d trades", len(trades))
        return FormattedTrades(trades=trades, count=len(trades), summary=summarize(trades))

    async def summary(
        self,
        user_address: str | None = None,
        proposal_id: str | None = None,
        limit: int | None = 100,
    ) -> TradeSummary:
        result = await self.formatted_trades(user_address=user_address, proposal_id=proposal_id, limit=limit)
        return result.summary

    async def user_trades(self, user_address: str | None, limit: int | None = 100) -> list[ClassifiedTrade]:
        if not user_address:
            raise ValueError("User address is required")
        result = await self.formatted_trades(user_address=user_address, limit=limit)
        return result.trades

    async def proposal_trades(self, proposal_id: str | None, limit: int | None = 100) -> list[ClassifiedTrade]:
        if not proposal_id:
            raise ValueError("Proposal ID is required")
        result = await self.formatted_trades(proposal_id=proposal_id, limit=limit)
        return result.trades

    async def recent_trades(self, limit: int = 50) -> list[ClassifiedTrade]:
        result = await self.formatted_trades(limit=limit)
        return result.trades

    async def _with_symbols(self, raws: list[RawTrade], registry: TokenRegistry) -> list[RawTrade]:
        """Fill missing symbols for tokens the registry does not know."""
        missing = [
            address
            for raw in raws
            for address, symbol in ((raw.token0, raw.token0_symbol), (raw.token1, raw.token1_symbol))
            if address and not symbol and address not in registry
        ]
        if not missing:
            return raws

        infos = await self._token_cache.resolve_many(missing)
        enriched = []
        for raw in raws:
            update = {}
            if raw.token0 and not raw.token0_symbol and raw.token0.lower() in infos:
                update["token0_symbol"] = infos[raw.token0.lower()].symbol
            if raw.token1 and not raw.token1_symbol and raw.token1.lower() in infos:
                update["token1_symbol"] = infos[raw.token1.lower()].symbol
            enriched.append(raw.model_copy(update=update) if update else raw)
        return enriched
