"""Two-way conversion between flat wire payloads and typed client models.

``*_from_wire`` functions accept decoded JSON dictionaries and raise
MalformedResponseError when a required field is missing or has the wrong
shape. ``*_to_wire`` functions are their inverses: optional fields that were
absent on the wire are omitted again, so a wire -> client -> wire round trip
reproduces the input payload. Chunks are the exception: the server always sends
every chunk key, so ``chunk_to_wire`` emits all of them.
"""

from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from raptor.exceptions import MalformedResponseError
from raptor.schema.models import (
    AutoLinkDiagnostics,
    AutoLinkSettings,
    Chunk,
    ChunkMetadata,
    ChunkPage,
    DedupStats,
    DedupSummary,
    DefaultVersionResult,
    DocumentInfo,
    DocumentVersion,
    EmbeddingRecommendations,
    ProcessingConfig,
    ProcessingState,
    ProcessingVariant,
    ProcessResult,
    RevertResult,
    UploadResult,
    VersionLabelResult,
)
from raptor.schema.wire import drop_none, optional_list, optional_tuple, wire_mapping

_CONFIG_FIELDS = tuple(f.name for f in fields(ProcessingConfig))

# client attribute -> wire key, where they differ
_CHUNK_RENAMES = {"section": "section_hierarchy", "custom_metadata": "metadata"}
_CHUNK_SEQUENCE_FIELDS = ("page_range", "section")
_AUTO_LINK_KEYS = {
    "auto_linked": "auto_linked",
    "confidence": "auto_link_confidence",
    "explanation": "auto_link_explanation",
    "method": "auto_link_method",
    "parent_document_id": "parent_document_id",
}


# --- processing config -------------------------------------------------------


@wire_mapping("processing config")
def processing_config_from_wire(data: dict[str, Any]) -> ProcessingConfig:
    return ProcessingConfig(**{name: data.get(name) for name in _CONFIG_FIELDS})


def processing_config_to_wire(config: ProcessingConfig) -> dict[str, Any]:
    return drop_none({name: getattr(config, name) for name in _CONFIG_FIELDS})


# --- chunks ------------------------------------------------------------------


@wire_mapping("chunk")
def chunk_metadata_from_wire(data: dict[str, Any]) -> ChunkMetadata:
    values: dict[str, Any] = {}
    for f in fields(ChunkMetadata):
        key = _CHUNK_RENAMES.get(f.name, f.name)
        if f.name == "id":
            values["id"] = data["id"]
        elif f.name in _CHUNK_SEQUENCE_FIELDS:
            values[f.name] = tuple(data.get(key) or ())
        elif key in data and data[key] is not None:
            values[f.name] = data[key]
        elif f.name in ("contains_table", "is_reused"):
            values[f.name] = False
        elif f.name in ("tokens", "chunk_index"):
            values[f.name] = 0
    return ChunkMetadata(**values)


@wire_mapping("chunk")
def chunk_from_wire(data: dict[str, Any]) -> Chunk:
    return Chunk(text=data["text"], metadata=chunk_metadata_from_wire(data))


def chunk_metadata_to_wire(metadata: ChunkMetadata) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for f in fields(ChunkMetadata):
        value = getattr(metadata, f.name)
        if f.name in _CHUNK_SEQUENCE_FIELDS:
            value = list(value)
        payload[_CHUNK_RENAMES.get(f.name, f.name)] = value
    return payload


def chunk_to_wire(chunk: Chunk) -> dict[str, Any]:
    payload = {"text": chunk.text}
    payload.update(chunk_metadata_to_wire(chunk.metadata))
    return payload


@wire_mapping("chunk list")
def chunk_page_from_wire(data: dict[str, Any]) -> ChunkPage:
    raw_chunks = data.get("chunks") or []
    if not isinstance(raw_chunks, list):
        raise MalformedResponseError("'chunks' must be a list")
    chunks = tuple(chunk_from_wire(item) for item in raw_chunks)
    total = data.get("total")
    if not isinstance(total, int) or isinstance(total, bool):
        total = len(chunks)
    return ChunkPage(chunks=chunks, total=total)


def chunk_page_to_wire(page: ChunkPage) -> dict[str, Any]:
    return {"chunks": [chunk_to_wire(c) for c in page.chunks], "total": page.total}


# --- variants ----------------------------------------------------------------


@wire_mapping("processing state")
def _state(data: dict[str, Any]) -> ProcessingState:
    status = data["status"]
    try:
        return ProcessingState(status)
    except ValueError as exc:
        raise MalformedResponseError(f"Unknown processing status {status!r}") from exc


@wire_mapping("dedup stats")
def dedup_stats_from_wire(data: dict[str, Any]) -> DedupStats:
    raw_recs = data.get("embedding_recommendations")
    recommendations = None
    if raw_recs is not None:
        recommendations = EmbeddingRecommendations(
            reuse=raw_recs.get("reuse"),
            consider_reuse=raw_recs.get("consider_reuse"),
            regenerate=raw_recs.get("regenerate"),
        )
    return DedupStats(
        chunks_created=data["chunks_created"],
        chunks_reused=data["chunks_reused"],
        total_chunks=data["total_chunks"],
        savings_percent=data["savings_percent"],
        chunks_high_reuse=data.get("chunks_high_reuse"),
        chunks_partial_reuse=data.get("chunks_partial_reuse"),
        chunks_fuzzy_matched=data.get("chunks_fuzzy_matched"),
        total_sentences=data.get("total_sentences"),
        reused_sentences=data.get("reused_sentences"),
        new_sentences=data.get("new_sentences"),
        sentence_reuse_ratio=data.get("sentence_reuse_ratio"),
        embedding_recommendations=recommendations,
    )


def dedup_stats_to_wire(stats: DedupStats) -> dict[str, Any]:
    recs = stats.embedding_recommendations
    return drop_none(
        {
            "chunks_created": stats.chunks_created,
            "chunks_reused": stats.chunks_reused,
            "total_chunks": stats.total_chunks,
            "savings_percent": stats.savings_percent,
            "chunks_high_reuse": stats.chunks_high_reuse,
            "chunks_partial_reuse": stats.chunks_partial_reuse,
            "chunks_fuzzy_matched": stats.chunks_fuzzy_matched,
            "total_sentences": stats.total_sentences,
            "reused_sentences": stats.reused_sentences,
            "new_sentences": stats.new_sentences,
            "sentence_reuse_ratio": stats.sentence_reuse_ratio,
            "embedding_recommendations": (
                drop_none(
                    {
                        "reuse": recs.reuse,
                        "consider_reuse": recs.consider_reuse,
                        "regenerate": recs.regenerate,
                    }
                )
                if recs is not None
                else None
            ),
        }
    )


@wire_mapping("variant")
def variant_from_wire(data: dict[str, Any]) -> ProcessingVariant:
    raw_stats = data.get("dedup_stats")
    return ProcessingVariant(
        id=data["id"],
        version_id=data["version_id"],
        config_hash=data["config_hash"],
        config=processing_config_from_wire(data["config"]),
        status=_state(data),
        chunks_count=data["chunks_count"],
        total_tokens=data["total_tokens"],
        is_primary=data["is_primary"],
        created_at=data["created_at"],
        error=data.get("error"),
        page_count=data.get("page_count"),
        credits_charged=data.get("credits_charged"),
        dedup_stats=dedup_stats_from_wire(raw_stats) if raw_stats is not None else None,
        retry_count=data.get("retry_count"),
        max_retries=data.get("max_retries"),
        is_retrying=data.get("is_retrying"),
        in_dlq=data.get("in_dlq"),
        processed_at=data.get("processed_at"),
    )


def variant_to_wire(variant: ProcessingVariant) -> dict[str, Any]:
    return drop_none(
        {
            "id": variant.id,
            "version_id": variant.version_id,
            "config_hash": variant.config_hash,
            "config": processing_config_to_wire(variant.config),
            "status": variant.status.value,
            "error": variant.error,
            "chunks_count": variant.chunks_count,
            "total_tokens": variant.total_tokens,
            "page_count": variant.page_count,
            "credits_charged": variant.credits_charged,
            "is_primary": variant.is_primary,
            "dedup_stats": (
                dedup_stats_to_wire(variant.dedup_stats)
                if variant.dedup_stats is not None
                else None
            ),
            "retry_count": variant.retry_count,
            "max_retries": variant.max_retries,
            "is_retrying": variant.is_retrying,
            "in_dlq": variant.in_dlq,
            "created_at": variant.created_at,
            "processed_at": variant.processed_at,
        }
    )


@wire_mapping("status")
def status_from_wire(data: dict[str, Any]) -> tuple[ProcessingState, str | None]:
    """Read only the state and error string from a status payload."""
    return _state(data), data.get("error")


# --- versions ----------------------------------------------------------------


@wire_mapping("document version")
def version_from_wire(data: dict[str, Any]) -> DocumentVersion:
    return DocumentVersion(
        id=data["id"],
        document_id=data["document_id"],
        version_number=data["version_number"],
        parent_version_id=data.get("parent_version_id"),
        filename=data["filename"],
        mime_type=data["mime_type"],
        file_size_bytes=data["file_size_bytes"],
        content_hash=data["content_hash"],
        created_at=data["created_at"],
        variants=tuple(variant_from_wire(v) for v in data["variants"]),
    )


def version_to_wire(version: DocumentVersion) -> dict[str, Any]:
    return drop_none(
        {
            "id": version.id,
            "document_id": version.document_id,
            "version_number": version.version_number,
            "parent_version_id": version.parent_version_id,
            "filename": version.filename,
            "mime_type": version.mime_type,
            "file_size_bytes": version.file_size_bytes,
            "content_hash": version.content_hash,
            "created_at": version.created_at,
            "variants": [variant_to_wire(v) for v in version.variants],
        }
    )


@wire_mapping("document")
def document_from_wire(data: dict[str, Any]) -> DocumentVersion:
    """Map GET /documents/{id}, which may be a flat document or a full version."""
    return DocumentVersion(
        id=data["id"],
        document_id=data.get("document_id") or data["id"],
        version_number=data.get("version_number") or 1,
        parent_version_id=data.get("parent_version_id"),
        filename=data["filename"],
        mime_type=data["mime_type"],
        file_size_bytes=data["file_size_bytes"],
        content_hash=data.get("content_hash") or "",
        created_at=data["created_at"],
        variants=tuple(variant_from_wire(v) for v in data.get("variants") or ()),
    )


@wire_mapping("version list")
def version_list_from_wire(data: dict[str, Any]) -> list[DocumentVersion]:
    return [version_from_wire(v) for v in data["versions"]]


# --- uploads -----------------------------------------------------------------


def _auto_link_from_wire(data: dict[str, Any]) -> AutoLinkDiagnostics | None:
    if all(data.get(key) is None for key in _AUTO_LINK_KEYS.values()):
        return None
    values = {attr: data.get(key) for attr, key in _AUTO_LINK_KEYS.items()}
    values["explanation"] = optional_tuple(values["explanation"])
    return AutoLinkDiagnostics(**values)


def _auto_link_to_wire(diagnostics: AutoLinkDiagnostics | None) -> dict[str, Any]:
    if diagnostics is None:
        return {}
    payload = {key: getattr(diagnostics, attr) for attr, key in _AUTO_LINK_KEYS.items()}
    payload["auto_link_explanation"] = optional_list(diagnostics.explanation)
    return drop_none(payload)


@wire_mapping("upload")
def upload_result_from_wire(data: dict[str, Any]) -> UploadResult:
    if not data.get("variant_id"):
        raise MalformedResponseError("Upload response missing variant ID")
    return UploadResult(
        variant_id=data["variant_id"],
        document_id=data["document_id"],
        version_id=data["version_id"],
        version_number=data["version_number"],
        is_new_document=data["is_new_document"],
        is_new_version=data["is_new_version"],
        is_new_variant=data["is_new_variant"],
        existing_match=data["existing_match"],
        status=data["status"],
        estimated_pages=data["estimated_pages"],
        deduplication_available=data["deduplication_available"],
        is_duplicate=data.get("is_duplicate"),
        canonical_document_id=data.get("canonical_document_id"),
        processing_skipped=data.get("processing_skipped"),
        cost_saved=data.get("cost_saved"),
        task_id=data.get("task_id"),
        chunks_count=data.get("chunks_count"),
        auto_link=_auto_link_from_wire(data),
    )


def upload_result_to_wire(result: UploadResult) -> dict[str, Any]:
    payload = drop_none(
        {
            "variant_id": result.variant_id,
            "document_id": result.document_id,
            "version_id": result.version_id,
            "version_number": result.version_number,
            "is_new_document": result.is_new_document,
            "is_new_version": result.is_new_version,
            "is_new_variant": result.is_new_variant,
            "existing_match": result.existing_match,
            "is_duplicate": result.is_duplicate,
            "canonical_document_id": result.canonical_document_id,
            "processing_skipped": result.processing_skipped,
            "cost_saved": result.cost_saved,
            "status": result.status,
            "task_id": result.task_id,
            "chunks_count": result.chunks_count,
            "estimated_pages": result.estimated_pages,
            "deduplication_available": result.deduplication_available,
        }
    )
    payload.update(_auto_link_to_wire(result.auto_link))
    return payload


def build_process_result(upload: UploadResult, chunks: Sequence[Chunk] = ()) -> ProcessResult:
    """Combine submission-time flags with fetched chunks into the final result."""
    return ProcessResult(
        document_id=upload.document_id,
        variant_id=upload.variant_id,
        version_id=upload.version_id,
        version_number=upload.version_number,
        is_new_document=upload.is_new_document,
        is_new_version=upload.is_new_version,
        is_new_variant=upload.is_new_variant,
        existing_match=upload.existing_match,
        deduplication_available=upload.deduplication_available,
        chunks=tuple(c.text for c in chunks),
        metadata=tuple(c.metadata for c in chunks),
        is_duplicate=upload.is_duplicate,
        canonical_document_id=upload.canonical_document_id,
        processing_skipped=upload.processing_skipped,
        cost_saved=upload.cost_saved,
        auto_link=upload.auto_link,
    )


# --- documents and account ---------------------------------------------------


@wire_mapping("document info")
def document_info_from_wire(data: dict[str, Any]) -> DocumentInfo:
    return DocumentInfo(
        id=data["id"],
        filename=data["filename"],
        mime_type=data["mime_type"],
        file_size_bytes=data["file_size_bytes"],
        status=data["status"],
        chunks_count=data["chunks_count"],
        total_tokens=data["total_tokens"],
        created_at=data["created_at"],
        store_content=bool(data.get("store_content", False)),
        deleted_at=data.get("deleted_at"),
        extractor_version=data.get("extractor_version"),
        retry_count=data.get("retry_count"),
        max_retries=data.get("max_retries"),
        is_retrying=data.get("is_retrying"),
        in_dlq=data.get("in_dlq"),
    )


def document_list_from_wire(data: Any) -> list[DocumentInfo]:
    if not isinstance(data, list):
        raise MalformedResponseError("Document list response must be an array")
    return [document_info_from_wire(item) for item in data]


@wire_mapping("dedup summary")
def dedup_summary_from_wire(data: dict[str, Any]) -> DedupSummary:
    return DedupSummary(
        variant_id=data["variant_id"],
        total_chunks=data["total_chunks"],
        chunk_breakdown=dict(data.get("chunk_breakdown") or {}),
        total_sentences=data.get("total_sentences", 0),
        reused_sentences=data.get("reused_sentences", 0),
        new_sentences=data.get("new_sentences", 0),
        sentence_reuse_ratio=data.get("sentence_reuse_ratio", 0.0),
        embedding_recommendations=dict(data.get("embedding_recommendations") or {}),
        parent_version_id=data.get("parent_version_id"),
        has_parent=bool(data.get("has_parent", False)),
    )


@wire_mapping("auto-link settings")
def auto_link_settings_from_wire(data: dict[str, Any]) -> AutoLinkSettings:
    return AutoLinkSettings(
        auto_link_enabled=data["auto_link_enabled"],
        auto_link_threshold=data["auto_link_threshold"],
    )


@wire_mapping("revert")
def revert_result_from_wire(data: dict[str, Any]) -> RevertResult:
    return RevertResult(
        reverted=data["reverted"],
        document_id=data["document_id"],
        reverted_from_version=data["reverted_from_version"],
        new_version_number=data["new_version_number"],
        new_version_id=data["new_version_id"],
    )


@wire_mapping("default version")
def default_version_result_from_wire(data: dict[str, Any]) -> DefaultVersionResult:
    return DefaultVersionResult(
        updated=data["updated"],
        document_id=data["document_id"],
        default_version_number=data["default_version_number"],
        latest_version_id=data["latest_version_id"],
    )


@wire_mapping("version label")
def version_label_result_from_wire(data: dict[str, Any]) -> VersionLabelResult:
    return VersionLabelResult(
        updated=data["updated"],
        document_id=data["document_id"],
        version_label=data.get("version_label"),
    )
