"""Collaborator interfaces consumed by the analyzer, orchestrator and trade history service.

Wallet signing and on-chain writes live behind these; nothing in this package
implements the write side.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from futarchy.domain.enums import TokenCategory
from futarchy.domain.models.market import TokenInfo
from futarchy.domain.models.swap import StrategyInfo, SwapRequest, SwapResult, TxReceipt


class BalanceProvider(ABC):
    @abstractmethod
    async def get_balance(self, token_address: str | None, user_address: str | None) -> str:
        """Decimal-string balance in token units. Returns "0" rather than raising when inputs are absent."""


class CollateralExecutor(ABC):
    """Splits collateral into YES/NO pairs and merges them back. Handles its own approvals."""

    @abstractmethod
    async def split(
        self, category: TokenCategory, amount: Decimal, market_id: str, token_address: str
    ) -> TxReceipt:
        """Split `amount` of collateral; resolves once the transaction settles."""

    @abstractmethod
    async def merge(
        self, category: TokenCategory, amount: Decimal, market_id: str, token_address: str
    ) -> TxReceipt:
        """Merge `amount` of YES+NO back into collateral."""


class SwapExecutor(ABC):
    """Strategy-based swap execution (algebra, cowswap, ...)."""

    @abstractmethod
    def available_strategies(self) -> list[str]:
        ...

    @abstractmethod
    def strategy_info(self, name: str) -> StrategyInfo | None:
        ...

    @abstractmethod
    async def needs_approval(
        self, strategy: str, token_in: str, amount: Decimal, user_address: str | None
    ) -> bool:
        """True if the strategy's spender lacks allowance for `amount` of token_in."""

    @abstractmethod
    async def execute_swap(self, request: SwapRequest) -> SwapResult:
        """Approve if needed, then swap via the selected strategy."""


class TokenMetadataReader(ABC):
    @abstractmethod
    async def token_metadata(self, token_address: str) -> TokenInfo:
        """Symbol/name/decimals for an ERC-20 token."""
