"""Error taxonomy for task operations and its mapping onto HTTP responses."""

from pydantic import BaseModel


class ErrorCode:
    """Error codes for specific error conditions."""

    # Input errors
    ERR_VALIDATION = "ERR_VALIDATION"

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_INVALID_STATE = "ERR_INVALID_STATE"

    # Infrastructure errors
    ERR_STORE = "ERR_STORE"
    ERR_AUTHENTICATION_FAILED = "ERR_AUTHENTICATION_FAILED"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class TaskError(Exception):
    """Base class for failures surfaced by the task service."""

    code: str = ErrorCode.ERR_UNKNOWN
    status_code: int = 500


class ValidationError(TaskError):
    """Bad input: empty title, unrecognized bucket, bad index."""

    code = ErrorCode.ERR_VALIDATION
    status_code = 400


class NotFoundError(TaskError):
    """Unknown task id."""

    code = ErrorCode.ERR_TASK_NOT_FOUND
    status_code = 404

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidStateError(TaskError):
    """Operation not allowed for the task's current state."""

    code = ErrorCode.ERR_INVALID_STATE
    status_code = 409


class StoreError(TaskError):
    """Underlying persistence failure. Fatal to the request, never retried."""

    code = ErrorCode.ERR_STORE
    status_code = 500


class ErrorResponse(BaseModel):
    """Structured error response returned by the HTTP layer."""

    code: str
    message: str
    status_code: int


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return the structured response sent to the client.

    Store failures and unexpected exceptions are reported with a generic
    message so driver details never leak to the browser.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message and HTTP status
    """
    if isinstance(exception, StoreError):
        return ErrorResponse(
            code=exception.code,
            message="The task store failed to complete the request.",
            status_code=exception.status_code,
        )

    if isinstance(exception, TaskError):
        return ErrorResponse(
            code=exception.code,
            message=str(exception),
            status_code=exception.status_code,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        status_code=500,
    )
