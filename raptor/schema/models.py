from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProcessingState(str, Enum):
    """Server-reported lifecycle stage of a processing variant."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingState.COMPLETED, ProcessingState.FAILED)


@dataclass(frozen=True)
class ProcessingConfig:
    """Server-side processing options. ``None`` means "not specified"."""

    chunk_size: int | None = None
    chunk_overlap: int | None = None
    strategy: str | None = None
    process_images: bool | None = None
    extract_section_numbers: bool | None = None
    calculate_quality_scores: bool | None = None
    min_chunk_quality: float | None = None
    enable_smart_context: bool | None = None
    table_extraction: bool | None = None
    table_context_generation: bool | None = None
    store_content: bool | None = None


@dataclass(frozen=True)
class ChunkMetadata:
    """Per-chunk metadata, including deduplication details."""

    id: str
    page_number: int | None = None
    page_range: tuple[int, ...] = ()
    section: tuple[str, ...] = ()
    tokens: int = 0
    chunk_index: int = 0
    custom_metadata: dict[str, Any] | None = None
    chunk_type: str | None = None
    contains_table: bool = False
    table_metadata: dict[str, Any] | None = None
    chunking_strategy: str | None = None
    section_number: str | None = None
    quality_score: float | None = None
    synthetic_context: str | None = None
    parent_chunk_id: str | None = None
    bounding_box: dict[str, Any] | None = None
    dedup_strategy: str | None = None
    dedup_confidence: float | None = None
    is_reused: bool = False
    dedup_source_chunk_id: str | None = None
    total_sentences: int | None = None
    reused_sentences_count: int | None = None
    new_sentences_count: int | None = None
    content_reuse_ratio: float | None = None
    embedding_recommendation: str | None = None
    recommendation_confidence: str | None = None
    dedup_metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class Chunk:
    """A chunk of document text together with its metadata."""

    text: str
    metadata: ChunkMetadata


@dataclass(frozen=True)
class ChunkPage:
    chunks: tuple[Chunk, ...] = ()
    total: int = 0


@dataclass(frozen=True)
class EmbeddingRecommendations:
    reuse: int | None = None
    consider_reuse: int | None = None
    regenerate: int | None = None


@dataclass(frozen=True)
class DedupStats:
    """Chunk and sentence reuse statistics for a variant."""

    chunks_created: int
    chunks_reused: int
    total_chunks: int
    savings_percent: float
    chunks_high_reuse: int | None = None
    chunks_partial_reuse: int | None = None
    chunks_fuzzy_matched: int | None = None
    total_sentences: int | None = None
    reused_sentences: int | None = None
    new_sentences: int | None = None
    sentence_reuse_ratio: float | None = None
    embedding_recommendations: EmbeddingRecommendations | None = None


@dataclass(frozen=True)
class ProcessingVariant:
    """Status snapshot of one processing run (the job handle's resource)."""

    id: str
    version_id: str
    config_hash: str
    config: ProcessingConfig
    status: ProcessingState
    chunks_count: int
    total_tokens: int
    is_primary: bool
    created_at: str
    error: str | None = None
    page_count: int | None = None
    credits_charged: float | None = None
    dedup_stats: DedupStats | None = None
    retry_count: int | None = None
    max_retries: int | None = None
    is_retrying: bool | None = None
    in_dlq: bool | None = None
    processed_at: str | None = None


@dataclass(frozen=True)
class DocumentVersion:
    id: str
    document_id: str
    version_number: int
    filename: str
    mime_type: str
    file_size_bytes: int
    content_hash: str
    created_at: str
    parent_version_id: str | None = None
    variants: tuple[ProcessingVariant, ...] = ()


@dataclass(frozen=True)
class AutoLinkDiagnostics:
    """What the server's auto-link heuristic decided for an upload."""

    auto_linked: bool | None = None
    confidence: float | None = None
    explanation: tuple[str, ...] | None = None
    method: str | None = None
    parent_document_id: str | None = None


@dataclass(frozen=True)
class UploadResult:
    """Submission response: the job handle plus submission-time flags."""

    variant_id: str
    document_id: str
    version_id: str
    version_number: int
    is_new_document: bool
    is_new_version: bool
    is_new_variant: bool
    existing_match: bool
    status: str
    estimated_pages: int
    deduplication_available: bool
    is_duplicate: bool | None = None
    canonical_document_id: str | None = None
    processing_skipped: bool | None = None
    cost_saved: float | None = None
    task_id: str | None = None
    chunks_count: int | None = None
    auto_link: AutoLinkDiagnostics | None = None


@dataclass(frozen=True)
class ProcessResult:
    """Terminal result of a processing lifecycle."""

    document_id: str
    variant_id: str
    version_id: str
    version_number: int
    is_new_document: bool
    is_new_version: bool
    is_new_variant: bool
    existing_match: bool
    deduplication_available: bool
    chunks: tuple[str, ...] = ()
    metadata: tuple[ChunkMetadata, ...] = ()
    is_duplicate: bool | None = None
    canonical_document_id: str | None = None
    processing_skipped: bool | None = None
    cost_saved: float | None = None
    auto_link: AutoLinkDiagnostics | None = None

    @property
    def job_handle(self) -> str:
        return self.variant_id


@dataclass(frozen=True)
class DocumentInfo:
    id: str
    filename: str
    mime_type: str
    file_size_bytes: int
    status: str
    chunks_count: int
    total_tokens: int
    created_at: str
    store_content: bool = False
    deleted_at: str | None = None
    extractor_version: str | None = None
    retry_count: int | None = None
    max_retries: int | None = None
    is_retrying: bool | None = None
    in_dlq: bool | None = None


@dataclass(frozen=True)
class DedupSummary:
    variant_id: str
    total_chunks: int
    chunk_breakdown: dict[str, int] = field(default_factory=dict)
    total_sentences: int = 0
    reused_sentences: int = 0
    new_sentences: int = 0
    sentence_reuse_ratio: float = 0.0
    embedding_recommendations: dict[str, int] = field(default_factory=dict)
    parent_version_id: str | None = None
    has_parent: bool = False


@dataclass(frozen=True)
class AutoLinkSettings:
    auto_link_enabled: bool
    auto_link_threshold: float


@dataclass(frozen=True)
class RevertResult:
    reverted: bool
    document_id: str
    reverted_from_version: int
    new_version_number: int
    new_version_id: str


@dataclass(frozen=True)
class DefaultVersionResult:
    updated: bool
    document_id: str
    default_version_number: int
    latest_version_id: str


@dataclass(frozen=True)
class VersionLabelResult:
    updated: bool
    document_id: str
    version_label: str | None = None
