"""Python client for the Raptor document-processing API."""

from raptor.client import RaptorClient
from raptor.config.settings import Settings
from raptor.exceptions import (
    APIError,
    InvalidFilenameError,
    InvalidSourceError,
    MalformedResponseError,
    NetworkError,
    ProcessingCancelledError,
    ProcessingError,
    ProcessingFailedError,
    ProcessingTimeoutError,
    RaptorError,
    ValidationError,
)
from raptor.lifecycle.models import PollingPolicy, ProcessOptions, ProgressEvent
from raptor.schema.models import ProcessingConfig, ProcessingState, ProcessResult
from raptor.submission.models import InMemoryFile

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "InMemoryFile",
    "InvalidFilenameError",
    "InvalidSourceError",
    "MalformedResponseError",
    "NetworkError",
    "PollingPolicy",
    "ProcessOptions",
    "ProcessResult",
    "ProcessingCancelledError",
    "ProcessingConfig",
    "ProcessingError",
    "ProcessingFailedError",
    "ProcessingState",
    "ProcessingTimeoutError",
    "ProgressEvent",
    "RaptorClient",
    "RaptorError",
    "Settings",
    "ValidationError",
]
