"""Translate workflow errors into HTTP errors with a stable code and the specific reason."""

from fastapi import HTTPException, status

from ratatoing.services.errors import (
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    WorkflowError,
)

# Checked in order; subclasses must come before their bases.
_STATUS_BY_ERROR: tuple[tuple[type[WorkflowError], int], ...] = (
    (UnauthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (ConstraintViolationError, 422),
)


def to_http_exception(error: WorkflowError) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            status_code = code
            break
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": error.message},
    )
