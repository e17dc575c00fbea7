"""Block explorer links for trade transactions."""

from futarchy.domain.enums import Chain

CHAIN_IDS: dict[int, Chain] = {
    1: Chain.ETHEREUM,
    100: Chain.GNOSIS,
    137: Chain.POLYGON,
    42161: Chain.ARBITRUM,
    10: Chain.OPTIMISM,
}

EXPLORERS: dict[Chain, str] = {
    Chain.GNOSIS: "https://gnosisscan.io/tx/",
    Chain.ETHEREUM: "https://etherscan.io/tx/",
    Chain.POLYGON: "https://polygonscan.com/tx/",
    Chain.ARBITRUM: "https://arbiscan.io/tx/",
    Chain.OPTIMISM: "https://optimistic.etherscan.io/tx/",
}

CHAIN_ALIASES: dict[str, Chain] = {"mainnet": Chain.ETHEREUM}


def resolve_chain(chain: str | int | None) -> Chain:
    """Chain name or numeric id -> Chain. Unknown values map to gnosis."""
    if isinstance(chain, int):
        return CHAIN_IDS.get(chain, Chain.GNOSIS)
    if not chain:
        return Chain.GNOSIS
    name = chain.strip().lower()
    if name.isdigit():
        return CHAIN_IDS.get(int(name), Chain.GNOSIS)
    if name in CHAIN_ALIASES:
        return CHAIN_ALIASES[name]
    try:
        return Chain(name)
    except ValueError:
        return Chain.GNOSIS


def transaction_link(tx_hash: str | None, chain: str | int | None = Chain.GNOSIS.value) -> str | None:
    """Explorer URL for a tx hash. Drops a trailing `_<log index>` suffix."""
    if not tx_hash:
        return None
    actual_hash = tx_hash.split("_")[0]
    return f"{EXPLORERS[resolve_chain(chain)]}{actual_hash}"
