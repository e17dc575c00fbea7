"""CollateralActionHandler: runs analysis actions through the collateral executor."""

import logging
from decimal import Decimal

from futarchy.domain.enums import TokenCategory
from futarchy.domain.models.swap import Action, SplitCollateralAction, TxReceipt
from futarchy.exceptions import ActionError
from futarchy.swap.ports import CollateralExecutor
from futarchy.tokens.registry import RegistryHolder

logger = logging.getLogger(__name__)


class CollateralActionHandler:
    def __init__(self, executor: CollateralExecutor, registry_holder: RegistryHolder) -> None:
        self._executor = executor
        self._registry_holder = registry_holder

    async def execute(self, action: Action) -> TxReceipt:
        if not isinstance(action, SplitCollateralAction):
            raise ActionError(f"Unknown action type: {action.type.value}")
        if not action.executable:
            raise ActionError(f"Action is not executable: {action.description}")
        return await self.split(action.collateral_category, action.amount)

    async def split(self, category: TokenCategory, amount: Decimal) -> TxReceipt:
        market_id, token_address = self._collateral(category)
        logger.info("Splitting %s %s collateral for market %s", amount, category.value, market_id)
        receipt = await self._executor.split(category, amount, market_id, token_address)
        if not receipt.success:
            raise ActionError(f"Collateral splitting transaction failed: {receipt.tx_hash}")
        return receipt

    async def merge(self, category: TokenCategory, amount: Decimal) -> TxReceipt:
        market_id, token_address = self._collateral(category)
        logger.info("Merging %s %s positions for market %s", amount, category.value, market_id)
        receipt = await self._executor.merge(category, amount, market_id, token_address)
        if not receipt.success:
            raise ActionError(f"Collateral merge transaction failed: {receipt.tx_hash}")
        return receipt

    def _collateral(self, category: TokenCategory) -> tuple[str, str]:
        registry = self._registry_holder.current
        collateral = registry.collateral_for(category)
        if collateral is None:
            raise ActionError(f"No collateral token configured for {category.value}")
        if not registry.market_id:
            raise ActionError("Market metadata not loaded")
        return registry.market_id, collateral.address
