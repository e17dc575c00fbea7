"""Execution plans for a swap: a fixed two-step sequence, collateral then swap."""

from futarchy.domain.enums import ActionType, StepType, SuggestionType
from futarchy.domain.models.swap import (
    ExecutionPlan,
    PlanStep,
    SplitCollateralAction,
    Substep,
    Suggestion,
    TokenAnalysis,
)

COLLATERAL_STEP = 1
SWAP_STEP = 2

COLLATERAL_TITLE = "Adding Collateral"
SWAP_TITLE = "Processing Swap"


def plan(analysis: TokenAnalysis, strategy_name: str) -> ExecutionPlan:
    split_actions = tuple(
        a for a in analysis.actions if isinstance(a, SplitCollateralAction) and a.executable
    )
    needs_collateral = analysis.can_auto_split

    collateral = PlanStep(
        step_number=COLLATERAL_STEP,
        type=StepType.COLLATERAL,
        title=COLLATERAL_TITLE,
        substeps=(
            Substep(id=1, text="Approving base token for collateral splitting"),
            Substep(id=2, text="Split wrapping position tokens"),
        ),
        required=needs_collateral,
        description=(
            f"Add {_fmt(analysis.shortage)} collateral to create missing tokens"
            if needs_collateral
            else "Sufficient tokens available - skipping collateral step"
        ),
        actions=split_actions,
    )
    swap = PlanStep(
        step_number=SWAP_STEP,
        type=StepType.SWAP,
        title=SWAP_TITLE,
        substeps=(
            Substep(id=1, text=f"Approving token for {strategy_name}"),
            Substep(id=2, text="Executing swap transaction"),
        ),
        required=True,
        description=f"Execute swap via {strategy_name} strategy",
    )
    return ExecutionPlan(
        steps=(collateral, swap),
        strategy_name=strategy_name,
        estimated_time=estimated_time(analysis),
    )


def estimated_time(analysis: TokenAnalysis) -> str:
    if not analysis.actions:
        return "< 1 minute"
    if any(a.type == ActionType.SPLIT_COLLATERAL for a in analysis.actions):
        return "2-3 minutes"  # split + swap
    return "1-2 minutes"


def suggestions(analysis: TokenAnalysis, auto_split_enabled: bool = True) -> list[Suggestion]:
    """What the user can do next. A possible split is always surfaced, auto or manual."""
    result: list[Suggestion] = []
    if analysis.can_auto_split and auto_split_enabled:
        result.append(Suggestion(
            type=SuggestionType.AUTO_SPLIT,
            title="Auto-Split Enabled",
            description="Missing tokens will be automatically created from collateral",
        ))
    if analysis.can_auto_split and not auto_split_enabled:
        result.append(Suggestion(
            type=SuggestionType.MANUAL_SPLIT,
            title="Manual Split Available",
            description=f"Split {_fmt(analysis.shortage)} {analysis.collateral_symbol or 'collateral'} to get missing tokens",
            executable=True,
        ))
    if not analysis.sufficient and not analysis.can_auto_split:
        result.append(Suggestion(
            type=SuggestionType.INSUFFICIENT_FUNDS,
            title="Insufficient Funds",
            description=(
                f"Need {_fmt(analysis.shortage)} more tokens. "
                f"Acquire more {analysis.collateral_symbol or 'collateral'} first"
            ),
        ))
    return result


def can_execute(analysis: TokenAnalysis, auto_split_enabled: bool = True) -> bool:
    if analysis.error:
        return False
    return analysis.sufficient or (analysis.can_auto_split and auto_split_enabled)


def requires_manual_action(analysis: TokenAnalysis, auto_split_enabled: bool = True) -> bool:
    return not auto_split_enabled and any(a.executable for a in analysis.actions)


def _fmt(value) -> str:
    return format(value.normalize(), "f")
