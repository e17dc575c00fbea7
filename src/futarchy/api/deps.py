from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from futarchy.config import Settings
from futarchy.container import Container
from futarchy.swap.analyzer import CollateralAnalyzer
from futarchy.tokens.registry import RegistryHolder
from futarchy.trades.service import TradeHistoryService


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_registry_holder(
    holder: RegistryHolder = Depends(Provide[Container.registry_holder]),
) -> RegistryHolder:
    return holder


@inject
def get_trade_service(
    service: TradeHistoryService = Depends(Provide[Container.trade_service]),
) -> TradeHistoryService:
    return service


@inject
def get_collateral_analyzer(
    analyzer: CollateralAnalyzer = Depends(Provide[Container.collateral_analyzer]),
) -> CollateralAnalyzer:
    return analyzer
