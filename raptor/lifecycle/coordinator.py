import threading
import time
from collections.abc import Callable, Iterator

from raptor.exceptions import (
    ProcessingCancelledError,
    ProcessingFailedError,
    ProcessingTimeoutError,
    ValidationError,
)
from raptor.lifecycle.models import LifecycleState, PollingPolicy, ProcessOptions, ProgressEvent
from raptor.logging.logger import Log
from raptor.resources.documents import DocumentsResource
from raptor.resources.variants import VariantsResource
from raptor.schema.mapper import build_process_result
from raptor.schema.models import ProcessingState, ProcessingVariant, ProcessResult, UploadResult
from raptor.submission.builder import SubmissionBuilder
from raptor.submission.models import UploadSource
from raptor.validators import require_uuid

# Stream percentages are placeholders; the API reports no fractional progress.
_STAGE_PERCENT = {
    ProcessingState.PENDING: ("queued", 25),
    ProcessingState.PROCESSING: ("processing", 50),
}


class LifecycleCoordinator:
    """Submit -> poll -> fetch for one document per call.

    Each call owns its attempt counter and start time, so independent calls
    may run on separate threads against the same coordinator.
    """

    def __init__(
        self,
        documents: DocumentsResource,
        variants: VariantsResource,
        builder: SubmissionBuilder,
        default_policy: PollingPolicy,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._documents = documents
        self._variants = variants
        self._builder = builder
        self._default_policy = default_policy
        self._clock = clock

    def run_to_completion(
        self,
        source: UploadSource,
        options: ProcessOptions | None = None,
    ) -> ProcessResult:
        """Submit a document and, unless ``options.wait`` is False, wait for its chunks.

        Raises:
            ProcessingFailedError: the server marked the job failed.
            ProcessingTimeoutError: the attempt or elapsed-time ceiling was hit.
            ProcessingCancelledError: ``options.cancel_event`` was set.
        """
        options = options or ProcessOptions()
        policy = self._policy_for(options)
        upload = self._submit(source, options)
        job_handle = upload.variant_id

        if not options.wait:
            Log.info(f"Job {job_handle} submitted, not waiting for completion")
            return build_process_result(upload)

        for _ in self._poll_until_complete(job_handle, policy, options.cancel_event):
            pass

        self._transition(job_handle, LifecycleState.FETCHING)
        page = self._variants.get_chunks(job_handle)
        self._transition(job_handle, LifecycleState.DONE, chunks=len(page.chunks))
        return build_process_result(upload, page.chunks)

    def run_as_stream(
        self,
        source: UploadSource,
        options: ProcessOptions | None = None,
    ) -> Iterator[ProgressEvent]:
        """Yield progress events for one submission until the job completes.

        The generator is single-use. Nothing is submitted until the first event
        is pulled, and a new call performs a new submission.
        """
        options = options or ProcessOptions()
        policy = self._policy_for(options)

        yield ProgressEvent(stage="upload", percent=0, message="Uploading document...")
        upload = self._submit(source, options)
        job_handle = upload.variant_id
        yield ProgressEvent(
            stage="upload", percent=100, message="Upload complete", job_handle=job_handle
        )

        for state in self._poll_until_complete(job_handle, policy, options.cancel_event):
            stage, percent = _STAGE_PERCENT[state]
            yield ProgressEvent(
                stage=stage,
                percent=percent,
                message=f"Document {stage}...",
                job_handle=job_handle,
            )

        self._transition(job_handle, LifecycleState.DONE)
        yield ProgressEvent(
            stage="complete", percent=100, message="Processing complete", job_handle=job_handle
        )

    def await_job(
        self,
        job_handle: str,
        max_wait: float = 300,
        poll_interval: float = 2,
        on_progress: Callable[[ProcessingVariant], None] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ProcessingVariant:
        """Wait on a handle obtained elsewhere, bounded by elapsed time only.

        The ceiling is checked before every status request, so no poll goes out
        once ``max_wait`` has passed. ``on_progress`` receives every polled
        variant before it is classified.
        """
        job_handle = require_uuid(job_handle, "variant ID")
        if max_wait <= 0:
            raise ValidationError(f"max_wait must be positive, got {max_wait}")
        if poll_interval <= 0:
            raise ValidationError(f"poll_interval must be positive, got {poll_interval}")

        started = self._clock()
        while True:
            if self._clock() - started > max_wait:
                self._transition(job_handle, LifecycleState.TIMED_OUT)
                raise ProcessingTimeoutError(job_handle, ProcessingTimeoutError.ELAPSED, max_wait)
            self._check_cancelled(job_handle, cancel_event)
            variant = self._variants.get(job_handle)
            Log.debug(f"Job {job_handle} polled: {variant.status.value}")
            if on_progress is not None:
                on_progress(variant)

            if variant.status.is_terminal:
                if variant.status is ProcessingState.FAILED:
                    self._transition(job_handle, LifecycleState.FAILED)
                    raise ProcessingFailedError(job_handle, variant.error)
                self._transition(job_handle, LifecycleState.DONE)
                return variant

            self._sleep(job_handle, poll_interval, cancel_event)

    def _submit(self, source: UploadSource, options: ProcessOptions) -> UploadResult:
        request = self._builder.build(
            source,
            options.config,
            parent_document_id=options.parent_document_id,
            version_label=options.version_label,
            auto_link=options.auto_link,
            auto_link_threshold=options.auto_link_threshold,
        )
        upload = self._documents.upload(request)
        self._transition(
            upload.variant_id,
            LifecycleState.SUBMITTED,
            document_id=upload.document_id,
            source_name=request.file.filename,
        )
        return upload

    def _poll_until_complete(
        self,
        job_handle: str,
        policy: PollingPolicy,
        cancel_event: threading.Event | None,
    ) -> Iterator[ProcessingState]:
        """Yield each non-terminal state seen; return once the job completes.

        Both ceilings are checked before every status request, attempts first.
        """
        attempts = 0
        started = self._clock()
        while True:
            attempts += 1
            if attempts > policy.max_attempts:
                self._transition(job_handle, LifecycleState.TIMED_OUT, attempts=attempts - 1)
                raise ProcessingTimeoutError(
                    job_handle, ProcessingTimeoutError.ATTEMPTS, policy.max_attempts
                )
            if self._clock() - started > policy.timeout:
                self._transition(job_handle, LifecycleState.TIMED_OUT, attempts=attempts - 1)
                raise ProcessingTimeoutError(
                    job_handle, ProcessingTimeoutError.ELAPSED, policy.timeout
                )

            self._check_cancelled(job_handle, cancel_event)
            state, error = self._variants.get_status(job_handle)
            Log.debug(f"Job {job_handle} poll {attempts}: {state.value}")

            if state.is_terminal:
                if state is ProcessingState.FAILED:
                    self._transition(job_handle, LifecycleState.FAILED, error=error)
                    raise ProcessingFailedError(job_handle, error)
                return

            yield state
            self._sleep(job_handle, policy.interval, cancel_event)

    def _policy_for(self, options: ProcessOptions) -> PollingPolicy:
        default = self._default_policy
        return PollingPolicy(
            interval=default.interval if options.poll_interval is None else options.poll_interval,
            max_attempts=(
                default.max_attempts
                if options.max_poll_attempts is None
                else options.max_poll_attempts
            ),
            timeout=default.timeout if options.poll_timeout is None else options.poll_timeout,
        )

    def _sleep(
        self,
        job_handle: str,
        interval: float,
        cancel_event: threading.Event | None,
    ) -> None:
        if cancel_event is None:
            time.sleep(interval)
            return
        self._check_cancelled(job_handle, cancel_event)
        if cancel_event.wait(interval):
            self._check_cancelled(job_handle, cancel_event)

    def _check_cancelled(self, job_handle: str, cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            self._transition(job_handle, LifecycleState.CANCELLED)
            raise ProcessingCancelledError(job_handle)

    @staticmethod
    def _transition(job_handle: str, state: LifecycleState, **details: object) -> None:
        if state in (LifecycleState.FAILED, LifecycleState.TIMED_OUT):
            Log.error(f"Job {job_handle} -> {state.value}", **details)
        elif state is LifecycleState.CANCELLED:
            Log.warning(f"Job {job_handle} -> {state.value}, remote job left running")
        else:
            Log.info(f"Job {job_handle} -> {state.value}", **details)
