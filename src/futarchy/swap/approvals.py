"""ApprovalCache: per-strategy allowance status for the current swap input."""

import logging
from decimal import Decimal

from futarchy.swap.ports import SwapExecutor

logger = logging.getLogger(__name__)


class ApprovalCache:
    """approved = not needs_approval, per strategy.

    `refreshing` is advisory: a non-forced check issued while another is in
    flight returns the current statuses without querying. Only the most
    recently started check publishes its statuses and clears `refreshing`,
    so a forced check is never overwritten by an older one finishing late.
    """

    def __init__(self, swap_executor: SwapExecutor) -> None:
        self._executor = swap_executor
        self._status: dict[str, bool] = {}
        self._generation = 0
        self.refreshing = False

    @property
    def status(self) -> dict[str, bool]:
        return dict(self._status)

    async def check(
        self,
        strategies: list[str] | None,
        token_in: str | None,
        amount: Decimal | None,
        user_address: str | None = None,
        force_refresh: bool = False,
    ) -> dict[str, bool]:
        if not token_in or not amount:
            return self.status
        if self.refreshing and not force_refresh:
            logger.debug("Approval check already in progress, skipping")
            return self.status

        if strategies is None:
            strategies = self._executor.available_strategies()

        self._generation += 1
        generation = self._generation
        self.refreshing = True
        try:
            status: dict[str, bool] = {}
            for strategy in strategies:
                try:
                    status[strategy] = not await self._executor.needs_approval(
                        strategy, token_in, amount, user_address,
                    )
                except Exception as e:
                    logger.warning("Approval check failed for %s: %s", strategy, e)
                    status[strategy] = False
            if generation == self._generation:
                self._status = status
            else:
                logger.debug("Discarding superseded approval check")
        finally:
            if generation == self._generation:
                self.refreshing = False
        return self.status

    def invalidate(self) -> None:
        """Clear statuses; checks still in flight will not publish."""
        self._generation += 1
        self._status = {}
        self.refreshing = False
