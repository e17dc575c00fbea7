"""EVM JSON-RPC client: read-only ERC-20 calls via eth_call."""

import asyncio
import logging
from decimal import Decimal

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from futarchy.domain.models.market import TokenInfo
from futarchy.exceptions import ExternalServiceError
from futarchy.infra.http.rate_limited_client import RateLimitedClient
from futarchy.swap.ports import TokenMetadataReader

logger = logging.getLogger(__name__)

# ERC-20 function selectors
BALANCE_OF = "0x70a08231"
SYMBOL = "0x95d89b41"
NAME = "0x06fdde03"
DECIMALS = "0x313ce567"


class EvmRpcClient(TokenMetadataReader):
    """Minimal JSON-RPC client for balances and token metadata."""

    def __init__(self, rpc_url: str, http_client: RateLimitedClient) -> None:
        self._rpc_url = rpc_url
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> str | dict | None:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        resp = await self._http.post(self._rpc_url, json=payload)
        data = resp.json()

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"RPC error ({method}): {msg}")

        return data.get("result")

    async def eth_call(self, to: str, data: str) -> str:
        result = await self._call("eth_call", [{"to": to, "data": data}, "latest"])
        if not isinstance(result, str):
            raise ExternalServiceError(f"Unexpected eth_call result from {to}: {result!r}")
        return result

    async def balance_of(self, token_address: str, owner: str) -> int:
        """Raw balance in the token's smallest unit."""
        result = await self.eth_call(token_address, BALANCE_OF + _encode_address(owner))
        return _decode_uint(result)

    async def decimals(self, token_address: str) -> int:
        return _decode_uint(await self.eth_call(token_address, DECIMALS))

    async def token_metadata(self, token_address: str) -> TokenInfo:
        """Fetch symbol, name and decimals concurrently."""
        symbol_hex, name_hex, decimals = await asyncio.gather(
            self.eth_call(token_address, SYMBOL),
            self.eth_call(token_address, NAME),
            self.decimals(token_address),
        )
        return TokenInfo(
            address=token_address.lower(),
            symbol=_decode_string(symbol_hex),
            name=_decode_string(name_hex),
            decimals=decimals,
        )


def to_units(raw: int, decimals: int = 18) -> Decimal:
    return Decimal(raw) / Decimal(10) ** decimals


def _encode_address(address: str) -> str:
    return address.lower().removeprefix("0x").rjust(64, "0")


def _decode_uint(result: str) -> int:
    body = result.removeprefix("0x")
    return int(body, 16) if body else 0


def _decode_string(result: str) -> str:
    """Decode an ABI `string` return, tolerating legacy bytes32 symbols."""
    body = result.removeprefix("0x")
    if not body:
        return ""
    if len(body) == 64:
        # bytes32 (e.g. MKR-style tokens)
        return bytes.fromhex(body).rstrip(b"\x00").decode("utf-8", errors="replace")
    offset = int(body[0:64], 16) * 2
    length = int(body[offset:offset + 64], 16)
    start = offset + 64
    return bytes.fromhex(body[start:start + length * 2]).decode("utf-8", errors="replace")
