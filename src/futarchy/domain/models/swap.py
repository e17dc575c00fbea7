"""Swap-side types: requests, analysis results, actions and execution plans."""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from futarchy.domain.enums import ActionType, StepType, SuggestionType, TokenCategory
from futarchy.domain.models.token import TokenRole


class SwapRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_in: str
    token_out: str
    amount: Decimal  # token units, 18 decimals
    user_address: str | None = None
    strategy: str | None = None  # None: the plan's strategy


class SwapResult(BaseModel):
    strategy_name: str
    tx_hash: str
    explorer_url: str | None = None


class TxReceipt(BaseModel):
    """Settled outcome of a pending transaction handle."""

    tx_hash: str
    success: bool = True


class StrategyInfo(BaseModel):
    display_name: str
    gas_required: bool = True
    description: str = ""


class SplitCollateralAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[ActionType.SPLIT_COLLATERAL] = ActionType.SPLIT_COLLATERAL
    collateral_category: TokenCategory
    amount: Decimal
    collateral_symbol: str = ""
    description: str = ""
    executable: bool = True


class InsufficientFundsAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[ActionType.INSUFFICIENT_FUNDS] = ActionType.INSUFFICIENT_FUNDS
    shortage: Decimal = Decimal(0)
    collateral_symbol: str | None = None
    description: str = ""
    executable: bool = False


Action = Annotated[Union[SplitCollateralAction, InsufficientFundsAction], Field(discriminator="type")]


class TokenAnalysis(BaseModel):
    """Sufficiency of a conditional (or regular) token balance for a desired swap.

    Callers must check `error` before trusting `sufficient`.
    """

    model_config = ConfigDict(frozen=True)

    sufficient: bool
    token_role: TokenRole | None = None
    current_balance: Decimal = Decimal(0)
    required_amount: Decimal = Decimal(0)
    shortage: Decimal = Decimal(0)
    can_auto_split: bool = False
    collateral_available: Decimal = Decimal(0)
    collateral_symbol: str | None = None
    actions: tuple[Action, ...] = ()
    error: str | None = None

    @property
    def is_conditional(self) -> bool:
        return self.token_role is not None and self.token_role.is_conditional


class Substep(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str


class PlanStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    step_number: int
    type: StepType
    title: str
    substeps: tuple[Substep, ...]
    required: bool
    description: str
    actions: tuple[SplitCollateralAction, ...] = ()


class ExecutionPlan(BaseModel):
    """Exactly two steps, COLLATERAL then SWAP. Only `required` varies."""

    model_config = ConfigDict(frozen=True)

    steps: tuple[PlanStep, PlanStep]
    strategy_name: str
    estimated_time: str = ""

    @property
    def collateral_step(self) -> PlanStep:
        return self.steps[0]

    @property
    def swap_step(self) -> PlanStep:
        return self.steps[1]


class Suggestion(BaseModel):
    type: SuggestionType
    title: str
    description: str
    executable: bool = False
