import threading
from dataclasses import dataclass, field
from enum import Enum

from raptor.exceptions import ValidationError
from raptor.schema.models import ProcessingConfig


class LifecycleState(str, Enum):
    """Client-side view of one job, from submission to a terminal outcome."""

    SUBMITTED = "submitted"
    FETCHING = "fetching"
    DONE = "done"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PollingPolicy:
    """Fixed-interval polling bounded by an attempt count and an elapsed time.

    ``interval`` and ``timeout`` are seconds.
    """

    interval: float
    max_attempts: int
    timeout: float

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValidationError(f"Poll interval must be positive, got {self.interval}")
        if self.max_attempts <= 0:
            raise ValidationError(f"Max poll attempts must be positive, got {self.max_attempts}")
        if self.timeout <= 0:
            raise ValidationError(f"Poll timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class ProgressEvent:
    stage: str
    percent: int
    message: str
    job_handle: str | None = None


@dataclass(frozen=True)
class ProcessOptions:
    """Per-call options for process and process_stream.

    Polling fields left as None fall back to the client's settings.
    """

    config: ProcessingConfig = field(default_factory=ProcessingConfig)
    wait: bool = True
    poll_interval: float | None = None
    max_poll_attempts: int | None = None
    poll_timeout: float | None = None
    parent_document_id: str | None = None
    version_label: str | None = None
    auto_link: bool | None = None
    auto_link_threshold: float | None = None
    cancel_event: threading.Event | None = None
