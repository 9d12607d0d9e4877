"""Typed errors raised by the workflow services and translated to HTTP by the routers."""


class WorkflowError(Exception):
    """Base class. message is user-facing; code is stable and machine-readable."""

    code = "workflow_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(WorkflowError):
    """Raised when the caller's rank does not allow the requested action."""

    code = "unauthorized"


class NotFoundError(WorkflowError):
    """Raised when the target record does not exist."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: int | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} {entity_id} not found.")


class InvalidStateError(WorkflowError):
    """Raised when the target is not in the state the transition starts from."""

    code = "invalid_state"

    def __init__(self, message: str, current_status: str | None = None) -> None:
        self.current_status = current_status
        super().__init__(message)


class ConstraintViolationError(WorkflowError):
    """Raised when input breaks a data rule (unknown job, non-positive amount, taken username)."""

    code = "constraint_violation"


class InsufficientFundsError(ConstraintViolationError):
    code = "insufficient_funds"
