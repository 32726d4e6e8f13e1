from typing import Any

import pytest

from raptor.exceptions import MalformedResponseError
from raptor.schema.mapper import (
    build_process_result,
    chunk_page_from_wire,
    chunk_page_to_wire,
    document_from_wire,
    document_list_from_wire,
    processing_config_from_wire,
    processing_config_to_wire,
    status_from_wire,
    upload_result_from_wire,
    upload_result_to_wire,
    variant_from_wire,
    variant_to_wire,
    version_from_wire,
    version_to_wire,
)
from raptor.schema.models import ProcessingState

DOC_ID = "0b6e3f2a-5c1d-4e8f-9a7b-3c2d1e0f9a8b"
VARIANT_ID = "5f4e3d2c-1b0a-4987-8654-3210fedcba98"
VERSION_ID = "9a8b7c6d-5e4f-4321-8765-0fedcba98765"


def _make_variant_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": VARIANT_ID,
        "version_id": VERSION_ID,
        "config_hash": "c0ffee",
        "config": {"chunk_size": 512, "strategy": "semantic", "process_images": False},
        "status": "completed",
        "error": "none",
        "chunks_count": 3,
        "total_tokens": 900,
        "page_count": 2,
        "credits_charged": 1.5,
        "is_primary": True,
        "dedup_stats": {
            "chunks_created": 1,
            "chunks_reused": 2,
            "total_chunks": 3,
            "savings_percent": 66.7,
            "chunks_high_reuse": 2,
            "sentence_reuse_ratio": 0.8,
            "embedding_recommendations": {"reuse": 2, "consider_reuse": 0, "regenerate": 1},
        },
        "retry_count": 0,
        "max_retries": 3,
        "is_retrying": False,
        "in_dlq": False,
        "created_at": "2025-01-01T00:00:00Z",
        "processed_at": "2025-01-01T00:01:00Z",
    }
    payload.update(overrides)
    return payload


def _make_upload_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "variant_id": VARIANT_ID,
        "document_id": DOC_ID,
        "version_id": VERSION_ID,
        "version_number": 2,
        "is_new_document": False,
        "is_new_version": True,
        "is_new_variant": True,
        "existing_match": False,
        "is_duplicate": True,
        "canonical_document_id": DOC_ID,
        "processing_skipped": False,
        "cost_saved": 0.0,
        "status": "pending",
        "task_id": "task-1",
        "chunks_count": 0,
        "estimated_pages": 4,
        "deduplication_available": True,
        "auto_linked": True,
        "auto_link_confidence": 0.91,
        "auto_link_explanation": ["same filename", "similar content"],
        "auto_link_method": "filename+content",
        "parent_document_id": DOC_ID,
    }
    payload.update(overrides)
    return payload


def _make_chunk_payload(index: int = 0) -> dict[str, Any]:
    return {
        "id": f"chunk-{index}",
        "text": f"Chunk text {index}",
        "page_number": 1,
        "page_range": [1, 2],
        "section_hierarchy": ["Intro", "Scope"],
        "tokens": 42,
        "chunk_index": index,
        "metadata": {"source": "test"},
        "chunk_type": "text",
        "contains_table": False,
        "table_metadata": None,
        "chunking_strategy": "semantic",
        "section_number": "1.2",
        "quality_score": 0.9,
        "synthetic_context": None,
        "parent_chunk_id": None,
        "bounding_box": {"x": 0, "y": 0},
        "dedup_strategy": "exact",
        "dedup_confidence": 1.0,
        "is_reused": True,
        "dedup_source_chunk_id": "chunk-old",
        "total_sentences": 4,
        "reused_sentences_count": 4,
        "new_sentences_count": 0,
        "content_reuse_ratio": 1.0,
        "embedding_recommendation": "reuse",
        "recommendation_confidence": "high",
        "dedup_metadata": None,
    }


class TestRoundTrip:
    def test_variant_round_trip(self) -> None:
        payload = _make_variant_payload()
        assert variant_to_wire(variant_from_wire(payload)) == payload

    def test_variant_minimal_round_trip(self) -> None:
        payload = _make_variant_payload()
        for key in ("error", "page_count", "credits_charged", "dedup_stats", "retry_count",
                    "max_retries", "is_retrying", "in_dlq", "processed_at"):
            del payload[key]
        assert variant_to_wire(variant_from_wire(payload)) == payload

    def test_upload_round_trip(self) -> None:
        payload = _make_upload_payload()
        assert upload_result_to_wire(upload_result_from_wire(payload)) == payload

    def test_chunk_page_round_trip(self) -> None:
        payload = {"chunks": [_make_chunk_payload(0), _make_chunk_payload(1)], "total": 2}
        assert chunk_page_to_wire(chunk_page_from_wire(payload)) == payload

    def test_version_round_trip(self) -> None:
        payload = {
            "id": VERSION_ID,
            "document_id": DOC_ID,
            "version_number": 1,
            "parent_version_id": None,
            "filename": "report.pdf",
            "mime_type": "application/pdf",
            "file_size_bytes": 1024,
            "content_hash": "abc",
            "created_at": "2025-01-01T00:00:00Z",
            "variants": [_make_variant_payload()],
        }
        expected = dict(payload)
        del expected["parent_version_id"]
        assert version_to_wire(version_from_wire(payload)) == expected

    def test_config_keeps_explicit_false(self) -> None:
        payload = {"process_images": False, "chunk_overlap": 0, "strategy": "custom"}
        assert processing_config_to_wire(processing_config_from_wire(payload)) == payload


class TestChunkMapping:
    def test_renames_section_and_metadata(self) -> None:
        page = chunk_page_from_wire({"chunks": [_make_chunk_payload()], "total": 1})
        metadata = page.chunks[0].metadata

        assert metadata.section == ("Intro", "Scope")
        assert metadata.custom_metadata == {"source": "test"}
        assert metadata.page_range == (1, 2)

    def test_missing_total_falls_back_to_length(self) -> None:
        page = chunk_page_from_wire({"chunks": [_make_chunk_payload()]})
        assert page.total == 1

    def test_missing_optional_fields_use_defaults(self) -> None:
        page = chunk_page_from_wire({"chunks": [{"id": "c1", "text": "t"}]})
        metadata = page.chunks[0].metadata

        assert metadata.tokens == 0
        assert metadata.is_reused is False
        assert metadata.section == ()

    def test_chunks_not_a_list_raises(self) -> None:
        with pytest.raises(MalformedResponseError):
            chunk_page_from_wire({"chunks": "oops"})

    def test_chunk_without_text_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="missing field 'text'"):
            chunk_page_from_wire({"chunks": [{"id": "c1"}]})


class TestStatusMapping:
    @pytest.mark.parametrize("status", ["pending", "processing", "completed", "failed"])
    def test_known_states(self, status: str) -> None:
        state, _error = status_from_wire({"status": status})
        assert state is ProcessingState(status)

    def test_failed_carries_error(self) -> None:
        assert status_from_wire({"status": "failed", "error": "bad pdf"}) == (
            ProcessingState.FAILED,
            "bad pdf",
        )

    def test_unknown_status_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="Unknown processing status"):
            status_from_wire({"status": "exploded"})

    def test_non_object_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="must be an object"):
            status_from_wire(["completed"])

    def test_terminal_states(self) -> None:
        assert ProcessingState.COMPLETED.is_terminal
        assert ProcessingState.FAILED.is_terminal
        assert not ProcessingState.PENDING.is_terminal


class TestDedupStatsMapping:
    def test_recommendations_not_an_object_raises(self) -> None:
        payload = _make_variant_payload()
        payload["dedup_stats"] = {**payload["dedup_stats"], "embedding_recommendations": [1, 2]}

        with pytest.raises(MalformedResponseError, match="dedup stats payload is malformed"):
            variant_from_wire(payload)


class TestUploadMapping:
    def test_missing_variant_id_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="missing variant ID"):
            upload_result_from_wire(_make_upload_payload(variant_id=None))

    def test_no_auto_link_keys_gives_none(self) -> None:
        payload = _make_upload_payload()
        for key in ("auto_linked", "auto_link_confidence", "auto_link_explanation",
                    "auto_link_method", "parent_document_id"):
            del payload[key]
        assert upload_result_from_wire(payload).auto_link is None

    def test_process_result_has_empty_chunks_without_fetch(self) -> None:
        result = build_process_result(upload_result_from_wire(_make_upload_payload()))

        assert result.job_handle == VARIANT_ID
        assert result.chunks == ()
        assert result.metadata == ()
        assert result.is_duplicate is True
        assert result.auto_link is not None
        assert result.auto_link.explanation == ("same filename", "similar content")


class TestDocumentMapping:
    def test_flat_document_defaults_to_version_one(self) -> None:
        doc = document_from_wire(
            {
                "id": DOC_ID,
                "filename": "report.pdf",
                "mime_type": "application/pdf",
                "file_size_bytes": 10,
                "created_at": "2025-01-01T00:00:00Z",
            }
        )

        assert doc.document_id == DOC_ID
        assert doc.version_number == 1
        assert doc.variants == ()

    def test_document_list_must_be_array(self) -> None:
        with pytest.raises(MalformedResponseError, match="must be an array"):
            document_list_from_wire({"documents": []})
