"""TokenInfoCache: TTL cache of token symbol/name in front of a metadata reader."""

import asyncio
import logging
import time

from futarchy.domain.models.market import TokenInfo
from futarchy.swap.ports import TokenMetadataReader
from futarchy.tokens.symbols import short_address

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class TokenInfoCache:
    def __init__(self, reader: TokenMetadataReader | None = None, ttl_seconds: float = 3600.0) -> None:
        self._reader = reader
        self._ttl = ttl_seconds
        self._entries: dict[str, tuple[float, TokenInfo]] = {}

    def get(self, address: str) -> TokenInfo | None:
        entry = self._entries.get(address.lower())
        if entry is None:
            return None
        stored_at, info = entry
        if time.monotonic() - stored_at > self._ttl:
            return None
        return info

    def put(self, info: TokenInfo) -> None:
        self._entries[info.address.lower()] = (time.monotonic(), info)

    def clear(self) -> None:
        self._entries.clear()

    async def resolve(self, address: str) -> TokenInfo:
        cached = self.get(address)
        if cached is not None:
            return cached
        if address.lower() == ZERO_ADDRESS:
            return TokenInfo(address=address.lower(), symbol="ETH", name="Ethereum")

        info: TokenInfo | None = None
        if self._reader is not None:
            try:
                info = await self._reader.token_metadata(address)
            except Exception as e:
                logger.warning("Failed to fetch token info for %s: %s", address, e)

        if info is None or not info.symbol:
            # Fallback is not cached so a later call can retry the read
            return TokenInfo(address=address.lower(), symbol=short_address(address), name="Unknown Token")
        self.put(info)
        return info

    async def resolve_many(self, addresses: list[str]) -> dict[str, TokenInfo]:
        """Resolve all distinct addresses concurrently. Keys are lowercase."""
        unique = list(dict.fromkeys(a.lower() for a in addresses if a))
        infos = await asyncio.gather(*(self.resolve(a) for a in unique))
        return dict(zip(unique, infos))
