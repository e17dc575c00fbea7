class FutarchyError(Exception):
    """Base error for the futarchy trade engine."""


class ExternalServiceError(FutarchyError):
    """An upstream service (RPC node, Supabase) failed. Retriable."""


class ActionError(FutarchyError):
    """A collateral action could not be executed."""


class OrchestrationError(FutarchyError):
    """A swap plan halted at a phase/substep."""

    def __init__(self, message: str, step: int | None = None, substep: int | None = None) -> None:
        super().__init__(message)
        self.step = step
        self.substep = substep
