"""Models and mappers for document lineage (version chains across uploads)."""

from dataclasses import dataclass
from typing import Any

from raptor.schema.wire import wire_mapping


@dataclass(frozen=True)
class LineageDocument:
    id: str
    filename: str
    content_hash: str
    created_at: str
    file_size_bytes: int
    is_current: bool
    version_label: str | None = None
    parent_document_id: str | None = None
    similarity_score: float | None = None


@dataclass(frozen=True)
class DocumentLineage:
    lineage_id: str
    total_versions: int
    documents: tuple[LineageDocument, ...] = ()


@dataclass(frozen=True)
class LineageTreeNode:
    id: str
    filename: str
    created_at: str
    version_label: str | None = None
    similarity_score: float | None = None
    children: tuple["LineageTreeNode", ...] = ()


@dataclass(frozen=True)
class LineageTree:
    total_versions: int
    roots: tuple[LineageTreeNode, ...] = ()


@dataclass(frozen=True)
class LineageVersionRef:
    id: str
    filename: str
    created_at: str
    version_label: str | None = None


@dataclass(frozen=True)
class LineageStats:
    total_versions: int
    oldest_version: LineageVersionRef
    newest_version: LineageVersionRef
    total_size_bytes: int
    avg_similarity: float
    version_labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class SimilarDocument:
    document_id: str
    filename: str
    similarity_score: float
    created_at: str
    version_label: str | None = None


@dataclass(frozen=True)
class SimilarDocuments:
    suggestions: tuple[SimilarDocument, ...]
    count: int


@dataclass(frozen=True)
class LinkResult:
    document_id: str
    parent_document_id: str
    lineage_id: str
    similarity_score: float
    version_label: str | None = None


@dataclass(frozen=True)
class UnlinkResult:
    document_id: str
    new_lineage_id: str


@dataclass(frozen=True)
class ComparedDocument:
    id: str
    filename: str
    content_hash: str
    created_at: str
    total_chunks: int


@dataclass(frozen=True)
class ChunkDiff:
    added_chunks: tuple[Any, ...]
    removed_chunks: tuple[Any, ...]
    unchanged_chunks: tuple[Any, ...]
    added_count: int
    removed_count: int
    unchanged_count: int
    similarity_score: float


@dataclass(frozen=True)
class DocumentComparison:
    similarity_score: float
    document_1: ComparedDocument
    document_2: ComparedDocument
    diff: ChunkDiff
    summary: str


@dataclass(frozen=True)
class LineageChangelog:
    changelogs: tuple[dict[str, Any], ...]
    total_transitions: int


@wire_mapping("lineage")
def lineage_from_wire(data: dict[str, Any]) -> DocumentLineage:
    return DocumentLineage(
        lineage_id=data["lineage_id"],
        total_versions=data["total_versions"],
        documents=tuple(
            LineageDocument(
                id=d["id"],
                filename=d["filename"],
                content_hash=d["content_hash"],
                created_at=d["created_at"],
                file_size_bytes=d["file_size_bytes"],
                is_current=d["is_current"],
                version_label=d.get("version_label"),
                parent_document_id=d.get("parent_document_id"),
                similarity_score=d.get("similarity_score"),
            )
            for d in data["documents"]
        ),
    )


@wire_mapping("lineage tree node")
def _tree_node_from_wire(data: dict[str, Any]) -> LineageTreeNode:
    document = data["document"]
    return LineageTreeNode(
        id=document["id"],
        filename=document["filename"],
        created_at=document["created_at"],
        version_label=document.get("version_label"),
        similarity_score=document.get("similarity_score"),
        children=tuple(_tree_node_from_wire(child) for child in data.get("children") or ()),
    )


@wire_mapping("lineage tree")
def lineage_tree_from_wire(data: dict[str, Any]) -> LineageTree:
    return LineageTree(
        total_versions=data["total_versions"],
        roots=tuple(_tree_node_from_wire(node) for node in data["roots"]),
    )


def _version_ref(data: dict[str, Any]) -> LineageVersionRef:
    return LineageVersionRef(
        id=data["id"],
        filename=data["filename"],
        created_at=data["created_at"],
        version_label=data.get("version_label"),
    )


@wire_mapping("lineage stats")
def lineage_stats_from_wire(data: dict[str, Any]) -> LineageStats:
    return LineageStats(
        total_versions=data["total_versions"],
        oldest_version=_version_ref(data["oldest_version"]),
        newest_version=_version_ref(data["newest_version"]),
        total_size_bytes=data["total_size_bytes"],
        avg_similarity=data["avg_similarity"],
        version_labels=tuple(data.get("version_labels") or ()),
    )


@wire_mapping("similar documents")
def similar_documents_from_wire(data: dict[str, Any]) -> SimilarDocuments:
    return SimilarDocuments(
        suggestions=tuple(
            SimilarDocument(
                document_id=s["document_id"],
                filename=s["filename"],
                similarity_score=s["similarity_score"],
                created_at=s["created_at"],
                version_label=s.get("version_label"),
            )
            for s in data["suggestions"]
        ),
        count=data["count"],
    )


@wire_mapping("link")
def link_result_from_wire(data: dict[str, Any]) -> LinkResult:
    return LinkResult(
        document_id=data["document_id"],
        parent_document_id=data["parent_document_id"],
        lineage_id=data["lineage_id"],
        similarity_score=data["similarity_score"],
        version_label=data.get("version_label"),
    )


@wire_mapping("unlink")
def unlink_result_from_wire(data: dict[str, Any]) -> UnlinkResult:
    return UnlinkResult(document_id=data["document_id"], new_lineage_id=data["new_lineage_id"])


def _compared_document(data: dict[str, Any]) -> ComparedDocument:
    return ComparedDocument(
        id=data["id"],
        filename=data["filename"],
        content_hash=data["content_hash"],
        created_at=data["created_at"],
        total_chunks=data["total_chunks"],
    )


@wire_mapping("comparison")
def comparison_from_wire(data: dict[str, Any]) -> DocumentComparison:
    diff = data["diff"]
    return DocumentComparison(
        similarity_score=data["similarity_score"],
        document_1=_compared_document(data["document_1"]),
        document_2=_compared_document(data["document_2"]),
        diff=ChunkDiff(
            added_chunks=tuple(diff["added_chunks"]),
            removed_chunks=tuple(diff["removed_chunks"]),
            unchanged_chunks=tuple(diff["unchanged_chunks"]),
            added_count=diff["added_count"],
            removed_count=diff["removed_count"],
            unchanged_count=diff["unchanged_count"],
            similarity_score=diff["similarity_score"],
        ),
        summary=data["summary"],
    )


@wire_mapping("changelog")
def changelog_from_wire(data: dict[str, Any]) -> LineageChangelog:
    return LineageChangelog(
        changelogs=tuple(data.get("changelogs") or ()),
        total_transitions=data["total_transitions"],
    )
