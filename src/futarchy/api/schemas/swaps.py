from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from futarchy.domain.models.swap import ExecutionPlan, Suggestion, TokenAnalysis


class SwapAnalyzeRequest(BaseModel):
    token_in: str
    token_out: str
    amount: Decimal = Field(gt=0)
    user_address: str
    strategy: Optional[str] = None
    auto_split_enabled: bool = True

    @field_validator("token_in", "token_out", "user_address")
    @classmethod
    def normalize_address(cls, v: str) -> str:
        return v.strip().lower()


class SwapAnalyzeResponse(BaseModel):
    analysis: TokenAnalysis
    plan: ExecutionPlan
    suggestions: list[Suggestion]
    can_execute: bool
    requires_manual_action: bool
