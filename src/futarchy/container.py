from dependency_injector import containers, providers

from futarchy.config import Settings
from futarchy.infra.evm.balance_provider import RpcBalanceProvider
from futarchy.infra.evm.rpc_client import EvmRpcClient
from futarchy.infra.http.rate_limited_client import RateLimitedClient
from futarchy.infra.supabase.trade_history_client import TradeHistoryClient
from futarchy.swap.actions import CollateralActionHandler
from futarchy.swap.analyzer import CollateralAnalyzer
from futarchy.swap.orchestrator import SwapOrchestrator
from futarchy.swap.ports import CollateralExecutor, SwapExecutor
from futarchy.tokens.metadata import TokenInfoCache
from futarchy.tokens.registry import load_registry_holder
from futarchy.trades.classifier import TradeClassifier
from futarchy.trades.service import TradeHistoryService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["futarchy.api.deps"])

    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout_seconds,
    )

    rpc_client = providers.Singleton(
        EvmRpcClient,
        rpc_url=settings.provided.rpc_url,
        http_client=http_client,
    )

    trade_history_client = providers.Singleton(
        TradeHistoryClient,
        base_url=settings.provided.supabase_url,
        api_key=settings.provided.supabase_key,
        http_client=http_client,
    )

    registry_holder = providers.Singleton(
        load_registry_holder,
        metadata_path=settings.provided.market_metadata_path,
    )

    token_cache = providers.Singleton(
        TokenInfoCache,
        reader=rpc_client,
        ttl_seconds=settings.provided.token_cache_ttl_seconds,
    )

    balance_provider = providers.Singleton(RpcBalanceProvider, rpc=rpc_client)

    classifier = providers.Singleton(TradeClassifier, default_chain=settings.provided.chain)

    trade_service = providers.Singleton(
        TradeHistoryService,
        client=trade_history_client,
        registry_holder=registry_holder,
        token_cache=token_cache,
        classifier=classifier,
    )

    collateral_analyzer = providers.Singleton(
        CollateralAnalyzer,
        balance_provider=balance_provider,
        registry_holder=registry_holder,
    )

    # Wallet-side executors are supplied by the embedding application via override()
    swap_executor = providers.Dependency(instance_of=SwapExecutor)
    collateral_executor = providers.Dependency(instance_of=CollateralExecutor)

    collateral_action_handler = providers.Factory(
        CollateralActionHandler,
        executor=collateral_executor,
        registry_holder=registry_holder,
    )

    # One orchestrator per swap attempt
    swap_orchestrator = providers.Factory(
        SwapOrchestrator,
        action_handler=collateral_action_handler,
        swap_executor=swap_executor,
        split_timeout=settings.provided.split_timeout_seconds,
        settling_delay=settings.provided.settling_delay_seconds,
        reanalysis_delay=settings.provided.reanalysis_delay_seconds,
    )
