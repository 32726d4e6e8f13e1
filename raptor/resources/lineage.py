from raptor.resources.paths import DOCUMENTS
from raptor.schema.lineage import (
    DocumentComparison,
    DocumentLineage,
    LineageChangelog,
    LineageStats,
    LineageTree,
    LinkResult,
    SimilarDocuments,
    UnlinkResult,
    changelog_from_wire,
    comparison_from_wire,
    lineage_from_wire,
    lineage_stats_from_wire,
    lineage_tree_from_wire,
    link_result_from_wire,
    similar_documents_from_wire,
    unlink_result_from_wire,
)
from raptor.transport.base import BaseTransport
from raptor.validators import require_unit_interval, require_uuid


class LineageResource:
    """Operations on document lineage (how uploads relate as versions)."""

    def __init__(self, transport: BaseTransport) -> None:
        self._transport = transport

    def get(self, document_id: str, *, include_deleted: bool = False) -> DocumentLineage:
        document_id = require_uuid(document_id)
        query = {"include_deleted": "true"} if include_deleted else {}
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/lineage", context="Get document lineage", query=query
        )
        return lineage_from_wire(payload)

    def get_tree(self, document_id: str) -> LineageTree:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/lineage/tree", context="Get lineage tree"
        )
        return lineage_tree_from_wire(payload)

    def get_stats(self, document_id: str) -> LineageStats:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/lineage/stats", context="Get lineage stats"
        )
        return lineage_stats_from_wire(payload)

    def find_similar(
        self,
        document_id: str,
        *,
        min_similarity: float = 0.7,
        limit: int = 10,
    ) -> SimilarDocuments:
        document_id = require_uuid(document_id)
        require_unit_interval(min_similarity, "min_similarity")
        payload = self._transport.send(
            "GET",
            f"{DOCUMENTS}/{document_id}/similar",
            context="Find similar documents",
            query={"min_similarity": str(min_similarity), "limit": str(limit)},
        )
        return similar_documents_from_wire(payload)

    def link_to_parent(
        self,
        document_id: str,
        parent_document_id: str,
        version_label: str | None = None,
    ) -> LinkResult:
        document_id = require_uuid(document_id)
        parent_document_id = require_uuid(parent_document_id, "parent document ID")
        body = {"parent_document_id": parent_document_id}
        if version_label is not None:
            body["version_label"] = version_label
        payload = self._transport.send(
            "POST",
            f"{DOCUMENTS}/{document_id}/link-parent",
            context="Link to parent",
            json_body=body,
        )
        return link_result_from_wire(payload)

    def unlink(self, document_id: str) -> UnlinkResult:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "DELETE", f"{DOCUMENTS}/{document_id}/unlink", context="Unlink from lineage"
        )
        return unlink_result_from_wire(payload)

    def compare(self, doc1_id: str, doc2_id: str) -> DocumentComparison:
        doc1_id = require_uuid(doc1_id)
        doc2_id = require_uuid(doc2_id)
        payload = self._transport.send(
            "GET",
            f"{DOCUMENTS}/compare",
            context="Compare documents",
            query={"doc1": doc1_id, "doc2": doc2_id},
        )
        return comparison_from_wire(payload)

    def get_changelog(self, document_id: str) -> LineageChangelog:
        document_id = require_uuid(document_id)
        payload = self._transport.send(
            "GET", f"{DOCUMENTS}/{document_id}/changelog", context="Get lineage changelog"
        )
        return changelog_from_wire(payload)
