from typing import Annotated

from fastapi import APIRouter, Depends

from futarchy.api.deps import get_collateral_analyzer, get_settings
from futarchy.api.schemas.swaps import SwapAnalyzeRequest, SwapAnalyzeResponse
from futarchy.config import Settings
from futarchy.swap import planner
from futarchy.swap.analyzer import CollateralAnalyzer

router = APIRouter(prefix="/api/swaps", tags=["swaps"])


@router.post("/analyze", response_model=SwapAnalyzeResponse)
async def analyze_swap(
    body: SwapAnalyzeRequest,
    analyzer: Annotated[CollateralAnalyzer, Depends(get_collateral_analyzer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SwapAnalyzeResponse:
    """Check balances for the swap input and build the two-step execution plan."""
    analysis = await analyzer.analyze(body.token_in, body.amount, body.user_address)
    strategy = body.strategy or settings.default_strategy
    return SwapAnalyzeResponse(
        analysis=analysis,
        plan=planner.plan(analysis, strategy),
        suggestions=planner.suggestions(analysis, body.auto_split_enabled),
        can_execute=planner.can_execute(analysis, body.auto_split_enabled),
        requires_manual_action=planner.requires_manual_action(analysis, body.auto_split_enabled),
    )
