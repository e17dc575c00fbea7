"""SwapOrchestrator: drives an ExecutionPlan to completion.

State machine: idle -> phase 1 (substeps 1..2) -> phase 2 (substeps 1..2) -> completed.
A failure at any substep records the error and halts; nothing is rolled back
and nothing is retried automatically. `retry` resumes at the first incomplete
step without replaying completed substeps.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable

from futarchy.domain.models.events import Completed, PhaseError, PhaseStarted, ProgressEvent, SubstepCompleted
from futarchy.domain.models.swap import Action, ExecutionPlan, SwapRequest, SwapResult
from futarchy.exceptions import OrchestrationError
from futarchy.swap.actions import CollateralActionHandler
from futarchy.swap.approvals import ApprovalCache
from futarchy.swap.planner import COLLATERAL_STEP, SWAP_STEP
from futarchy.swap.ports import SwapExecutor

logger = logging.getLogger(__name__)

COMPLETED = "completed"


@dataclass
class StepProgress:
    completed: bool = False
    substeps: dict[int, bool] = field(default_factory=dict)


@dataclass
class ExecutionState:
    processing_step: int | str | None = None  # None, 1, 2 or "completed"
    current_substep: tuple[int, int] = (COLLATERAL_STEP, 1)
    steps: dict[int, StepProgress] = field(
        default_factory=lambda: {COLLATERAL_STEP: StepProgress(), SWAP_STEP: StepProgress()}
    )
    error: str | None = None
    failed_at: tuple[int, int] | None = None
    approvals: dict[str, bool] = field(default_factory=dict)
    expanded_steps: dict[int, bool] = field(default_factory=dict)
    result: SwapResult | None = None

    @property
    def halted(self) -> bool:
        return self.error is not None

    @property
    def completed(self) -> bool:
        return self.processing_step == COMPLETED

    def substep_done(self, step: int, substep: int) -> bool:
        return self.steps[step].substeps.get(substep, False)

    def mark(self, step: int, substep: int) -> SubstepCompleted:
        self.steps[step].substeps[substep] = True
        return SubstepCompleted(step=step, substep=substep)


class SwapOrchestrator:
    """One instance per swap attempt. Callers must not run two plans concurrently on it."""

    def __init__(
        self,
        action_handler: CollateralActionHandler,
        swap_executor: SwapExecutor,
        approvals: ApprovalCache | None = None,
        balance_refresher: Callable[[], Awaitable[object]] | None = None,
        reanalyze: Callable[[SwapRequest], Awaitable[object]] | None = None,
        split_timeout: float = 60.0,
        settling_delay: float = 2.0,
        reanalysis_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._actions = action_handler
        self._swaps = swap_executor
        self._approvals = approvals or ApprovalCache(swap_executor)
        self._balance_refresher = balance_refresher
        self._reanalyze = reanalyze
        self._split_timeout = split_timeout
        self._settling_delay = settling_delay
        self._reanalysis_delay = reanalysis_delay
        self._sleep = sleep

        self.state = ExecutionState()
        self._plan: ExecutionPlan | None = None
        self._request: SwapRequest | None = None
        self._auto_split = True
        self._pending: set[asyncio.Task] = set()

    @property
    def approvals(self) -> ApprovalCache:
        return self._approvals

    async def start(
        self, plan: ExecutionPlan, request: SwapRequest, auto_split_enabled: bool = True
    ) -> AsyncIterator[ProgressEvent]:
        self.state = ExecutionState()
        self._plan = plan
        self._request = request
        self._auto_split = auto_split_enabled
        async for event in self._run():
            yield event

    async def retry(self, auto_split_enabled: bool | None = None) -> AsyncIterator[ProgressEvent]:
        """Resume the last plan from its first incomplete step."""
        if self._plan is None or self._request is None:
            raise OrchestrationError("No plan to retry")
        if auto_split_enabled is not None:
            self._auto_split = auto_split_enabled
        self.state.error = None
        self.state.failed_at = None
        async for event in self._run():
            yield event

    async def execute(
        self, plan: ExecutionPlan, request: SwapRequest, auto_split_enabled: bool = True
    ) -> SwapResult:
        async for event in self.start(plan, request, auto_split_enabled):
            logger.debug("Swap progress: %s", event)
        return self._outcome()

    async def execute_retry(self, auto_split_enabled: bool | None = None) -> SwapResult:
        async for event in self.retry(auto_split_enabled):
            logger.debug("Swap progress: %s", event)
        return self._outcome()

    async def execute_action(self, action: Action, request: SwapRequest) -> bool:
        """Run a single user-triggered action outside the plan, e.g. "split now"."""
        try:
            self.state.approvals = await self._approvals.check(
                None, request.token_in, request.amount, request.user_address,
            )
            await self._actions.execute(action)
        except Exception as e:
            logger.warning("Manual action execution failed: %s", e)
            return False

        task = asyncio.create_task(self._delayed_reanalysis(request))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    async def drain(self) -> None:
        """Wait for scheduled re-analyses."""
        if self._pending:
            await asyncio.gather(*self._pending)

    def reset(self) -> None:
        """Clear local state. Transactions already submitted are not revoked."""
        self.state = ExecutionState()
        self._plan = None
        self._request = None
        self._approvals.invalidate()

    async def _run(self) -> AsyncIterator[ProgressEvent]:
        assert self._plan is not None and self._request is not None
        self.state.approvals = await self._approvals.check(
            self._swaps.available_strategies(),
            self._request.token_in,
            self._request.amount,
            self._request.user_address,
        )

        if not self.state.steps[COLLATERAL_STEP].completed:
            async for event in self._collateral_phase(self._plan, self._request):
                yield event
            if self.state.halted:
                return

        if not self.state.steps[SWAP_STEP].completed:
            async for event in self._swap_phase(self._plan, self._request):
                yield event

    async def _collateral_phase(self, plan: ExecutionPlan, request: SwapRequest) -> AsyncIterator[ProgressEvent]:
        state = self.state
        step = plan.collateral_step
        state.processing_step = COLLATERAL_STEP
        state.current_substep = (COLLATERAL_STEP, 1)
        state.expanded_steps[COLLATERAL_STEP] = True
        yield PhaseStarted(step=COLLATERAL_STEP)

        if not (step.required and self._auto_split) or not step.actions:
            # Sufficiency was already established by the analysis
            for substep in (1, 2):
                if not state.substep_done(COLLATERAL_STEP, substep):
                    state.mark(COLLATERAL_STEP, substep)
                    yield SubstepCompleted(step=COLLATERAL_STEP, substep=substep, skipped=True)
            state.steps[COLLATERAL_STEP].completed = True
            state.expanded_steps[COLLATERAL_STEP] = False
            return

        # Substep 1: the collateral executor approves internally
        if not state.substep_done(COLLATERAL_STEP, 1):
            yield state.mark(COLLATERAL_STEP, 1)

        state.current_substep = (COLLATERAL_STEP, 2)
        error = await self._run_splits(step.actions)
        if error is not None:
            yield error
            return
        yield state.mark(COLLATERAL_STEP, 2)
        state.steps[COLLATERAL_STEP].completed = True
        state.expanded_steps.update({COLLATERAL_STEP: False, SWAP_STEP: True})

        await self._after_split(request)

    async def _run_splits(self, actions: tuple[Action, ...]) -> PhaseError | None:
        for action in actions:
            try:
                await asyncio.wait_for(self._actions.execute(action), timeout=self._split_timeout)
            except asyncio.TimeoutError:
                return self._fail(
                    COLLATERAL_STEP, 2,
                    f"Collateral step failed: Collateral split timeout after {self._split_timeout:g} seconds",
                )
            except Exception as e:
                return self._fail(COLLATERAL_STEP, 2, f"Collateral step failed: {e}")
        return None

    async def _after_split(self, request: SwapRequest) -> None:
        if self._balance_refresher is not None:
            try:
                await self._balance_refresher()
            except Exception:
                logger.exception("Balance refresh after split failed")
        await self._sleep(self._settling_delay)
        # Splitting may change which strategies are pre-approved
        self.state.approvals = await self._approvals.check(
            self._swaps.available_strategies(),
            request.token_in,
            request.amount,
            request.user_address,
            force_refresh=True,
        )

    async def _swap_phase(self, plan: ExecutionPlan, request: SwapRequest) -> AsyncIterator[ProgressEvent]:
        state = self.state
        state.processing_step = SWAP_STEP
        state.current_substep = (SWAP_STEP, 1)
        state.expanded_steps[SWAP_STEP] = True
        yield PhaseStarted(step=SWAP_STEP)

        # Substep 1: the swap executor approves internally
        if not state.substep_done(SWAP_STEP, 1):
            yield state.mark(SWAP_STEP, 1)

        state.current_substep = (SWAP_STEP, 2)
        swap_request = request if request.strategy else request.model_copy(update={"strategy": plan.strategy_name})
        try:
            result = await self._swaps.execute_swap(swap_request)
        except Exception as e:
            yield self._fail(SWAP_STEP, 2, f"Swap step failed: {e}")
            return

        yield state.mark(SWAP_STEP, 2)
        state.steps[SWAP_STEP].completed = True
        state.processing_step = COMPLETED
        state.result = result
        logger.info("Swap completed via %s: %s", result.strategy_name, result.tx_hash)
        yield Completed(result=result)

    def _fail(self, step: int, substep: int, message: str) -> PhaseError:
        logger.error("Swap plan halted at step %d.%d: %s", step, substep, message)
        self.state.error = message
        self.state.failed_at = (step, substep)
        return PhaseError(step=step, substep=substep, message=message)

    def _outcome(self) -> SwapResult:
        if self.state.error is not None:
            step, substep = self.state.failed_at or (None, None)
            raise OrchestrationError(self.state.error, step=step, substep=substep)
        if self.state.result is None:
            raise OrchestrationError("Swap plan did not complete")
        return self.state.result

    async def _delayed_reanalysis(self, request: SwapRequest) -> None:
        # Give the ledger read-path time to observe the split
        await self._sleep(self._reanalysis_delay)
        if self._reanalyze is None:
            return
        try:
            await self._reanalyze(request)
        except Exception:
            logger.exception("Re-analysis after manual action failed")
