from enum import Enum


class ActionType(str, Enum):
    SPLIT_COLLATERAL = "SPLIT_COLLATERAL"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


class StepType(str, Enum):
    """The two fixed steps of every execution plan, in order."""

    COLLATERAL = "COLLATERAL"
    SWAP = "SWAP"


class SuggestionType(str, Enum):
    AUTO_SPLIT = "AUTO_SPLIT"
    MANUAL_SPLIT = "MANUAL_SPLIT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
