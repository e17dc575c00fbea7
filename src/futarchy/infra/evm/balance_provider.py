"""Balance provider backed by eth_call balanceOf."""

from futarchy.infra.evm.rpc_client import EvmRpcClient, to_units
from futarchy.swap.ports import BalanceProvider


class RpcBalanceProvider(BalanceProvider):
    """Absent inputs read as "0"; RPC failures propagate as ExternalServiceError."""

    def __init__(self, rpc: EvmRpcClient, decimals: int = 18) -> None:
        self._rpc = rpc
        self._decimals = decimals

    async def get_balance(self, token_address: str | None, user_address: str | None) -> str:
        if not token_address or not user_address:
            return "0"
        raw = await self._rpc.balance_of(token_address, user_address)
        return str(to_units(raw, self._decimals))
