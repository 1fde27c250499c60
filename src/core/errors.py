"""
Error codes and caller-contract exceptions for the data-access layer.

Environment failures (timeouts, bad upstream responses) are reported as
failed ``Result`` values carrying one of the codes below. Exceptions are only
raised for mistakes the caller can fix before any request is made.
"""


class ErrorCodes:
    """Error code constants."""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    TIMEOUT = "TIMEOUT"
    BACKEND_RETURNED_HTML = "BACKEND_RETURNED_HTML"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    SHAPE_MISMATCH = "SHAPE_MISMATCH"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    TASK_ID_REQUIRED = "TASK_ID_REQUIRED"
    NETWORK_ERROR = "NETWORK_ERROR"


def http_status_code(status_code: int) -> str:
    """Synthetic error code for a non-2xx response without an error message."""
    return f"HTTP_{status_code}"


class DashboardError(ValueError):
    """Base class for caller-contract violations."""

    code = "DASHBOARD_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)


class AuthRequiredError(DashboardError):
    code = ErrorCodes.AUTH_REQUIRED


class TaskIdRequiredError(DashboardError):
    code = ErrorCodes.TASK_ID_REQUIRED


class InvalidPayloadError(DashboardError):
    code = ErrorCodes.INVALID_PAYLOAD


class ShapeMismatch(ValueError):
    """Raised by row parsers when a row lacks a required column."""

    def __init__(self, column: str, row_index: int | None = None):
        self.column = column
        self.row_index = row_index
        where = f" (row {row_index})" if row_index is not None else ""
        super().__init__(f"Missing required column '{column}'{where}")
