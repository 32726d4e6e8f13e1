from typing import Any

from raptor.resources.paths import DOCUMENTS
from raptor.schema.deletion import DeletionResult, map_deletion
from raptor.schema.duplicates import (
    DocumentDuplicates,
    DuplicateGroups,
    document_duplicates_from_wire,
    duplicate_groups_from_wire,
)
from raptor.schema.mapper import (
    chunk_page_from_wire,
    default_version_result_from_wire,
    document_from_wire,
    document_list_from_wire,
    revert_result_from_wire,
    upload_result_from_wire,
    version_from_wire,
    version_label_result_from_wire,
    version_list_from_wire,
)
from raptor.schema.models import (
    ChunkPage,
    DefaultVersionResult,
    DocumentInfo,
    DocumentVersion,
    ProcessingConfig,
    RevertResult,
    UploadResult,
    VersionLabelResult,
)
from raptor.schema.wire import drop_none
from raptor.submission.models import SubmissionRequest
from raptor.transport.base import BaseTransport
from raptor.validators import (
    require_pagination,
    require_unit_interval,
    require_uuid,
    require_version_number,
)

# Server defaults applied to a reprocess request when the caller leaves a field unset.
REPROCESS_DEFAULTS: dict[str, Any] = {
    "chunk_size": 512,
    "chunk_overlap": 50,
    "strategy": "semantic",
    "process_images": False,
    "extract_section_numbers": True,
    "calculate_quality_scores": True,
    "enable_smart_context": True,
    "table_extraction": True,
    "table_context_generation": False,
}


class DocumentsResource:
    """Operations on documents and their versions."""

    def __init__(self, transport: BaseTransport) -> None:
        self._transport = transport

    def upload(self, request: SubmissionRequest) -> UploadResult:
        payload = self._transport.send(
            "POST",
            DOCUMENTS,
            context="Upload",
            data=request.data,
            files=request.files,
            query=request.query,
        )
        return upload_result_from_wire(payload)

    def reprocess(self, document_id: str, config: ProcessingConfig) -> UploadResult:
        """Create a new variant of the latest version with a different config."""
        document_id = require_uuid(document_id)
        if config.min_chunk_quality is not None:
            require_unit_interval(config.min_chunk_quality, "min_chunk_quality")
        body = dict(REPROCESS_DEFAULTS)
        body.update(
            drop_none(
                {
                    "chunk_size": config.chunk_size,
                    "chunk_overlap": config.chunk_overlap,
                    "strategy": config.strategy,
                    "process_images": config.process_images,
                    "extract_section_numbers": config.extract_section_numbers,
                    "calculate_quality_scores": config.calculate_quality_scores,
                    "min_chunk_quality": config.min_chunk_quality,
                    "enable_smart_context": config.enable_smart_context,
                    "table_extraction": config.table_extraction,
                    "table_context_generation": config.table_context_generation,
                    "store_content": config.store_content,
                }
            )
        )
        payload = self._transport.send(
            "POST", f"{DOCUMENTS}/{document_id}/reprocess", context="Reprocess", json_body=body
        )
        return upload_result_from_wire(payload)

    def get(
        self,
        document_id: str,
        *,
        version: int | None = None,
        variant_id: str | None = None,
    ) -> DocumentVersion:
        document_id = require_uuid(document_id)
        query: dict[str, str] = {}
        if version is not None:
            query["version"] = str(require_version_number(version))
        if variant_id:
            query["variant_id"] = require_uuid(variant_id, "variant ID")
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}", context="Get document", query=query
        )
        return document_from_wire(payload)

    def list_documents(self, *, limit: int = 20, offset: int = 0) -> list[DocumentInfo]:
        require_pagination(limit, offset)
        payload = self._transport.send(
            "GET",
            DOCUMENTS,
            context="List documents",
            query={"limit": str(limit), "offset": str(offset)},
        )
        return document_list_from_wire(payload)

    def get_chunks(self, document_id: str, *, include_full_metadata: bool = False) -> ChunkPage:
        document_id = require_uuid(document_id)
        query = {"include_full_metadata": "true"} if include_full_metadata else {}
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/chunks", context="Get document chunks", query=query
        )
        return chunk_page_from_wire(payload)

    def delete(self, document_id: str) -> DeletionResult:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "DELETE", f"{DOCUMENTS}/{document_id}", context="Delete document"
        )
        return map_deletion(payload)

    def list_versions(self, document_id: str) -> list[DocumentVersion]:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/versions", context="List versions"
        )
        return version_list_from_wire(payload)

    def get_version(self, document_id: str, version_number: int) -> DocumentVersion:
        document_id = require_uuid(document_id)
        require_version_number(version_number)
        payload = self._transport.send(
            "GET",
            f"{DOCUMENTS}/{document_id}/versions/{version_number}",
            context="Get version",
        )
        return version_from_wire(payload)

    def delete_version(self, document_id: str, version_number: int) -> DeletionResult:
        document_id = require_uuid(document_id)
        require_version_number(version_number)
        payload = self._transport.send(
            "DELETE",
            f"{DOCUMENTS}/{document_id}/versions/{version_number}",
            context="Delete version",
        )
        return map_deletion(payload)

    def revert_to_version(self, document_id: str, version_number: int) -> RevertResult:
        document_id = require_uuid(document_id)
        require_version_number(version_number)
        payload = self._transport.send(
            "POST",
            f"{DOCUMENTS}/{document_id}/revert/{version_number}",
            context="Revert to version",
        )
        return revert_result_from_wire(payload)

    def set_default_version(self, document_id: str, version_number: int) -> DefaultVersionResult:
        document_id = require_uuid(document_id)
        require_version_number(version_number)
        payload = self._transport.send(
            "PUT",
            f"{DOCUMENTS}/{document_id}/default-version",
            context="Set default version",
            json_body={"version_number": version_number},
        )
        return default_version_result_from_wire(payload)

    def update_version_label(self, document_id: str, version_label: str | None) -> VersionLabelResult:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "PATCH",
            f"{DOCUMENTS}/{document_id}/version-label",
            context="Update version label",
            json_body={"version_label": version_label},
        )
        return version_label_result_from_wire(payload)

    def get_duplicates(self, document_id: str) -> DocumentDuplicates:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/duplicates", context="Get duplicates"
        )
        return document_duplicates_from_wire(payload)

    def list_all_duplicates(self) -> DuplicateGroups:
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/duplicates", context="List duplicates"
        )
        return duplicate_groups_from_wire(payload)
