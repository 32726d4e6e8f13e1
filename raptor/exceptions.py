from typing import Any


class RaptorError(Exception):
    """Base exception for all client errors."""


class ValidationError(RaptorError):
    """Raised for bad input caught before any network call."""


class InvalidSourceError(ValidationError):
    """Raised when a path-based upload source cannot be read or is not a regular file."""


class InvalidFilenameError(ValidationError):
    """Raised when a resolved upload filename contains path-traversal sequences."""


class NetworkError(RaptorError):
    """Raised when a request fails at the transport level (DNS, refused, timeout, abort)."""


class APIError(RaptorError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: Any) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(RaptorError):
    """Raised when a 2xx response body is undecodable or structurally unexpected."""


class ProcessingError(RaptorError):
    """Base exception for failures observed while waiting on a job."""

    def __init__(self, message: str, job_handle: str) -> None:
        super().__init__(message)
        self.job_handle = job_handle


class ProcessingFailedError(ProcessingError):
    """Raised when the remote job reaches the failed state."""

    def __init__(self, job_handle: str, server_error: str | None) -> None:
        self.server_error = server_error or "Unknown error"
        super().__init__(f"Processing failed: {self.server_error}", job_handle)


class ProcessingTimeoutError(ProcessingError):
    """Raised when a client-side polling ceiling is breached.

    ``ceiling`` is ``"attempts"`` or ``"elapsed"``; ``limit`` is the configured
    bound that was exceeded (an attempt count or a number of seconds).
    """

    ATTEMPTS = "attempts"
    ELAPSED = "elapsed"

    def __init__(self, job_handle: str, ceiling: str, limit: float) -> None:
        self.ceiling = ceiling
        self.limit = limit
        if ceiling == self.ATTEMPTS:
            message = f"Processing timeout: exceeded {limit} polling attempts"
        else:
            message = f"Processing timeout: exceeded {limit}s"
        super().__init__(message, job_handle)


class ProcessingCancelledError(ProcessingError):
    """Raised when the caller abandons a wait. The remote job keeps running."""

    def __init__(self, job_handle: str) -> None:
        super().__init__(f"Wait for job {job_handle} was cancelled", job_handle)
