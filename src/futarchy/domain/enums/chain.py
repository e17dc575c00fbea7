from enum import Enum


class Chain(str, Enum):
    """Supported networks. Values lowercase to match RPC/API conventions."""

    ETHEREUM = "ethereum"
    GNOSIS = "gnosis"
    POLYGON = "polygon"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
