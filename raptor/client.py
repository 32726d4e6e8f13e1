import threading
from collections.abc import Callable, Iterator
from types import TracebackType

from raptor.config.settings import Settings
from raptor.lifecycle.coordinator import LifecycleCoordinator
from raptor.lifecycle.models import PollingPolicy, ProcessOptions, ProgressEvent
from raptor.resources.account import AccountResource
from raptor.resources.documents import DocumentsResource
from raptor.resources.lineage import LineageResource
from raptor.resources.variants import VariantsResource
from raptor.schema.deletion import DeletionResult
from raptor.schema.duplicates import DocumentDuplicates, DuplicateGroups
from raptor.schema.lineage import (
    DocumentComparison,
    DocumentLineage,
    LineageChangelog,
    LineageStats,
    LineageTree,
    LinkResult,
    SimilarDocuments,
    UnlinkResult,
)
from raptor.schema.models import (
    AutoLinkSettings,
    ChunkPage,
    DedupSummary,
    DefaultVersionResult,
    DocumentInfo,
    DocumentVersion,
    ProcessingConfig,
    ProcessingVariant,
    ProcessResult,
    RevertResult,
    UploadResult,
    VersionLabelResult,
)
from raptor.submission.builder import SubmissionBuilder
from raptor.submission.models import UploadSource
from raptor.transport.base import BaseTransport
from raptor.transport.factory import TransportFactory


class RaptorClient:
    """Entry point for the Raptor document-processing API.

    Settings are read from ``RAPTOR_*`` environment variables when not given.
    A prebuilt transport may be injected, which skips credential checks.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: BaseTransport | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._transport = transport or TransportFactory.create(self._settings)
        self._documents = DocumentsResource(self._transport)
        self._variants = VariantsResource(self._transport)
        self._lineage = LineageResource(self._transport)
        self._account = AccountResource(self._transport)
        self._coordinator = LifecycleCoordinator(
            documents=self._documents,
            variants=self._variants,
            builder=SubmissionBuilder(),
            default_policy=PollingPolicy(
                interval=self._settings.poll_interval_seconds,
                max_attempts=self._settings.max_poll_attempts,
                timeout=self._settings.poll_timeout_seconds,
            ),
        )

    def __enter__(self) -> "RaptorClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    # Processing

    def process(self, source: UploadSource, options: ProcessOptions | None = None) -> ProcessResult:
        return self._coordinator.run_to_completion(source, options)

    def process_stream(
        self,
        source: UploadSource,
        options: ProcessOptions | None = None,
    ) -> Iterator[ProgressEvent]:
        return self._coordinator.run_as_stream(source, options)

    def wait_for_processing(
        self,
        variant_id: str,
        max_wait: float = 300,
        poll_interval: float = 2,
        on_progress: Callable[[ProcessingVariant], None] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ProcessingVariant:
        return self._coordinator.await_job(
            variant_id,
            max_wait=max_wait,
            poll_interval=poll_interval,
            on_progress=on_progress,
            cancel_event=cancel_event,
        )

    def reprocess(self, document_id: str, config: ProcessingConfig | None = None) -> UploadResult:
        return self._documents.reprocess(document_id, config or ProcessingConfig())

    # Variants

    def get_variant(self, variant_id: str) -> ProcessingVariant:
        return self._variants.get(variant_id)

    def get_chunks(
        self,
        variant_id: str,
        *,
        limit: int | None = None,
        offset: int | None = None,
        include_full_metadata: bool = False,
    ) -> ChunkPage:
        return self._variants.get_chunks(
            variant_id, limit=limit, offset=offset, include_full_metadata=include_full_metadata
        )

    def get_dedup_summary(self, variant_id: str) -> DedupSummary:
        return self._variants.get_dedup_summary(variant_id)

    def cancel_processing(self, variant_id: str) -> None:
        self._variants.cancel(variant_id)

    def delete_variant(self, variant_id: str) -> DeletionResult:
        return self._variants.delete(variant_id)

    # Documents

    def get_document(
        self,
        document_id: str,
        *,
        version: int | None = None,
        variant_id: str | None = None,
    ) -> DocumentVersion:
        return self._documents.get(document_id, version=version, variant_id=variant_id)

    def list_documents(self, *, limit: int = 20, offset: int = 0) -> list[DocumentInfo]:
        return self._documents.list_documents(limit=limit, offset=offset)

    def get_document_chunks(
        self, document_id: str, *, include_full_metadata: bool = False
    ) -> ChunkPage:
        return self._documents.get_chunks(document_id, include_full_metadata=include_full_metadata)

    def delete_document(self, document_id: str) -> DeletionResult:
        return self._documents.delete(document_id)

    # Versions

    def list_versions(self, document_id: str) -> list[DocumentVersion]:
        return self._documents.list_versions(document_id)

    def get_version(self, document_id: str, version_number: int) -> DocumentVersion:
        return self._documents.get_version(document_id, version_number)

    def delete_version(self, document_id: str, version_number: int) -> DeletionResult:
        return self._documents.delete_version(document_id, version_number)

    def revert_to_version(self, document_id: str, version_number: int) -> RevertResult:
        return self._documents.revert_to_version(document_id, version_number)

    def set_default_version(self, document_id: str, version_number: int) -> DefaultVersionResult:
        return self._documents.set_default_version(document_id, version_number)

    def update_version_label(
        self, document_id: str, version_label: str | None
    ) -> VersionLabelResult:
        return self._documents.update_version_label(document_id, version_label)

    # Duplicates

    def get_duplicates(self, document_id: str) -> DocumentDuplicates:
        return self._documents.get_duplicates(document_id)

    def list_all_duplicates(self) -> DuplicateGroups:
        return self._documents.list_all_duplicates()

    # Lineage

    def get_document_lineage(
        self, document_id: str, *, include_deleted: bool = False
    ) -> DocumentLineage:
        return self._lineage.get(document_id, include_deleted=include_deleted)

    def get_document_lineage_tree(self, document_id: str) -> LineageTree:
        return self._lineage.get_tree(document_id)

    def get_lineage_stats(self, document_id: str) -> LineageStats:
        return self._lineage.get_stats(document_id)

    def find_similar_documents(
        self,
        document_id: str,
        *,
        min_similarity: float = 0.7,
        limit: int = 10,
    ) -> SimilarDocuments:
        return self._lineage.find_similar(document_id, min_similarity=min_similarity, limit=limit)

    def link_to_parent(
        self,
        document_id: str,
        parent_document_id: str,
        version_label: str | None = None,
    ) -> LinkResult:
        return self._lineage.link_to_parent(document_id, parent_document_id, version_label)

    def unlink_from_lineage(self, document_id: str) -> UnlinkResult:
        return self._lineage.unlink(document_id)

    def compare_documents(self, doc1_id: str, doc2_id: str) -> DocumentComparison:
        return self._lineage.compare(doc1_id, doc2_id)

    def get_lineage_changelog(self, document_id: str) -> LineageChangelog:
        return self._lineage.get_changelog(document_id)

    # Account

    def get_auto_link_settings(self) -> AutoLinkSettings:
        return self._account.get_auto_link_settings()

    def update_auto_link_settings(
        self,
        *,
        enabled: bool | None = None,
        threshold: float | None = None,
    ) -> AutoLinkSettings:
        return self._account.update_auto_link_settings(enabled=enabled, threshold=threshold)
