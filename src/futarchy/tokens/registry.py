"""TokenRegistry: address → TokenRole lookup built from market metadata."""

import logging
from types import MappingProxyType
from typing import Mapping

from futarchy.domain.enums import TokenCategory, TokenSide
from futarchy.domain.models.market import MarketMetadata, TokenInfo, TokenSet, load_metadata
from futarchy.domain.models.token import TokenRole

logger = logging.getLogger(__name__)


class TokenRegistry:
    """Immutable snapshot mapping lowercase addresses to token roles.

    Never mutated after construction; a metadata change produces a new registry.
    """

    def __init__(
        self,
        roles: Mapping[str, TokenRole] | None = None,
        collateral: Mapping[TokenCategory, TokenRole] | None = None,
        market_id: str = "",
    ) -> None:
        self._roles: Mapping[str, TokenRole] = MappingProxyType(dict(roles or {}))
        self._collateral: Mapping[TokenCategory, TokenRole] = MappingProxyType(dict(collateral or {}))
        self._market_id = market_id

    @classmethod
    def build(cls, metadata: MarketMetadata) -> "TokenRegistry":
        roles: dict[str, TokenRole] = {}
        collateral: dict[TokenCategory, TokenRole] = {}

        for category, token_set in (
            (TokenCategory.COMPANY, metadata.company_tokens),
            (TokenCategory.CURRENCY, metadata.currency_tokens),
        ):
            for side, info in _conditional_tokens(token_set):
                _register(roles, info, category=category, side=side)
            if token_set.base is not None:
                base_role = _register(roles, token_set.base, category=TokenCategory.BASE, leg=category)
                if base_role is not None:
                    collateral[category] = base_role

        logger.debug("Token registry built for market %s: %d roles", metadata.market_id, len(roles))
        return cls(roles, collateral, market_id=metadata.market_id)

    @property
    def market_id(self) -> str:
        return self._market_id

    def classify(self, address: str | None) -> TokenRole | None:
        if not address:
            return None
        return self._roles.get(address.lower())

    def collateral_for(self, category: TokenCategory) -> TokenRole | None:
        """Base token a conditional category is split from."""
        return self._collateral.get(category)

    def roles(self) -> list[TokenRole]:
        return list(self._roles.values())

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address.lower() in self._roles


class RegistryHolder:
    """Owns the current registry snapshot for long-lived consumers.

    Metadata may arrive after consumers are constructed; rebuild() swaps the
    whole snapshot in a single assignment so no reader sees a half-built map.
    """

    def __init__(self, metadata: MarketMetadata | None = None) -> None:
        self._registry = TokenRegistry.build(metadata) if metadata is not None else TokenRegistry()
        self._metadata = metadata

    @property
    def current(self) -> TokenRegistry:
        return self._registry

    @property
    def metadata(self) -> MarketMetadata | None:
        return self._metadata

    def rebuild(self, metadata: MarketMetadata) -> TokenRegistry:
        registry = TokenRegistry.build(metadata)
        self._registry = registry
        self._metadata = metadata
        logger.info("Token registry rebuilt: %d roles (market %s)", len(registry), metadata.market_id)
        return registry


def _conditional_tokens(token_set: TokenSet) -> list[tuple[TokenSide, TokenInfo]]:
    pairs = [(TokenSide.YES, token_set.yes), (TokenSide.NO, token_set.no)]
    return [(side, info) for side, info in pairs if info is not None]


def _register(
    roles: dict[str, TokenRole],
    info: TokenInfo,
    *,
    category: TokenCategory,
    side: TokenSide = TokenSide.NONE,
    leg: TokenCategory | None = None,
) -> TokenRole | None:
    if not info.address:
        return None
    key = info.address.lower()
    if key in roles:
        # First registration wins: one role per address
        logger.warning("Duplicate token address %s in metadata, keeping %s", key, roles[key].category.value)
        return roles[key]
    role = TokenRole(
        address=key,
        category=category,
        side=side,
        symbol=info.symbol,
        name=info.name,
        decimals=info.decimals,
        leg=leg,
    )
    roles[key] = role
    return role


def load_registry_holder(metadata_path: str = "") -> RegistryHolder:
    """Registry holder seeded from a metadata JSON file, or empty until metadata arrives."""
    if not metadata_path:
        logger.info("No market metadata configured, token registry starts empty")
        return RegistryHolder()
    return RegistryHolder(load_metadata(metadata_path))
