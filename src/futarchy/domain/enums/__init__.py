from futarchy.domain.enums.chain import Chain
from futarchy.domain.enums.swap import ActionType, StepType, SuggestionType
from futarchy.domain.enums.token import TokenCategory, TokenSide
from futarchy.domain.enums.trade import OperationSide, OutcomeSide

__all__ = [
    "ActionType",
    "Chain",
    "OperationSide",
    "OutcomeSide",
    "StepType",
    "SuggestionType",
    "TokenCategory",
    "TokenSide",
]
