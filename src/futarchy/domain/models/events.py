"""Progress events emitted by the swap orchestrator."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from futarchy.domain.models.swap import SwapResult


class PhaseStarted(BaseModel):
    kind: Literal["phase_started"] = "phase_started"
    step: int


class SubstepCompleted(BaseModel):
    kind: Literal["substep_completed"] = "substep_completed"
    step: int
    substep: int
    skipped: bool = False


class PhaseError(BaseModel):
    kind: Literal["phase_error"] = "phase_error"
    step: int
    substep: int
    message: str


class Completed(BaseModel):
    kind: Literal["completed"] = "completed"
    result: SwapResult


ProgressEvent = Annotated[
    Union[PhaseStarted, SubstepCompleted, PhaseError, Completed],
    Field(discriminator="kind"),
]
