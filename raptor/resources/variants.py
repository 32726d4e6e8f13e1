from raptor.exceptions import ValidationError
from raptor.resources.paths import VARIANTS
from raptor.schema.deletion import DeletionResult, map_deletion
from raptor.schema.mapper import (
    chunk_page_from_wire,
    dedup_summary_from_wire,
    status_from_wire,
    variant_from_wire,
)
from raptor.schema.models import ChunkPage, DedupSummary, ProcessingState, ProcessingVariant
from raptor.transport.base import BaseTransport
from raptor.validators import require_uuid


class VariantsResource:
    """Operations on processing variants (the job handles)."""

    def __init__(self, transport: BaseTransport) -> None:
        self._transport = transport

    def get_status(self, variant_id: str) -> tuple[ProcessingState, str | None]:
        """Return only the processing state and server error of a variant."""
        variant_id = require_uuid(variant_id, "variant ID")
        payload = self._transport.send("GET", f"{VARIANTS}/{variant_id}", context="Status check")
        return status_from_wire(payload)

    def get(self, variant_id: str) -> ProcessingVariant:
        variant_id = require_uuid(variant_id, "variant ID")
        payload = self._transport.send("GET", f"{VARIANTS}/{variant_id}", context="Get variant")
        return variant_from_wire(payload)

    def get_chunks(
        self,
        variant_id: str,
        *,
        limit: int | None = None,
        offset: int | None = None,
        include_full_metadata: bool = False,
    ) -> ChunkPage:
        variant_id = require_uuid(variant_id, "variant ID")
        if limit is not None and limit < 1:
            raise ValidationError("Limit must be >= 1")
        if offset is not None and offset < 0:
            raise ValidationError("Offset must be non-negative")
        query: dict[str, str] = {}
        if limit is not None:
            query["limit"] = str(limit)
        if offset is not None:
            query["offset"] = str(offset)
        if include_full_metadata:
            query["include_full_metadata"] = "true"
        payload = self._transport.send(
            "GET",
            f"{VARIANTS}/{variant_id}/chunks",
            context="Get chunks",
            query=query,
        )
        return chunk_page_from_wire(payload)

    def get_dedup_summary(self, variant_id: str) -> DedupSummary:
        variant_id = require_uuid(variant_id, "variant ID")
        payload = self._transport.send(
            "GET", f"{VARIANTS}/{variant_id}/dedup-summary", context="Get dedup summary"
        )
        return dedup_summary_from_wire(payload)

    def cancel(self, variant_id: str) -> None:
        """Ask the server to cancel processing. Never called implicitly."""
        variant_id = require_uuid(variant_id, "variant ID")
        self._transport.send(
            "DELETE",
            f"{VARIANTS}/{variant_id}/cancel",
            context="Cancel processing",
            expect_body=False,
        )

    def delete(self, variant_id: str) -> DeletionResult:
        variant_id = require_uuid(variant_id, "variant ID")
        payload = self._transport.send(
            "DELETE", f"{VARIANTS}/{variant_id}", context="Delete variant"
        )
        return map_deletion(payload)
