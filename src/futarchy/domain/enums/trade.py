from enum import Enum


class OutcomeSide(str, Enum):
    """Which market outcome a trade belongs to."""

    YES = "yes"
    NO = "no"
    NEUTRAL = "neutral"


class OperationSide(str, Enum):
    BUY = "buy"
    SELL = "sell"
