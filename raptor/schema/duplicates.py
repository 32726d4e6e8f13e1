"""Models and mappers for documents sharing an identical content hash."""

from dataclasses import dataclass
from typing import Any

from raptor.schema.wire import wire_mapping


@dataclass(frozen=True)
class DuplicateDocument:
    id: str
    filename: str
    is_canonical: bool
    created_at: str
    latest_version_id: str | None = None


@dataclass(frozen=True)
class DuplicateGroup:
    content_hash: str
    canonical_document_id: str
    canonical_filename: str
    duplicates: tuple[DuplicateDocument, ...]
    total_count: int


@dataclass(frozen=True)
class DuplicateGroups:
    duplicate_groups: tuple[DuplicateGroup, ...]
    total_groups: int
    total_duplicates: int


@dataclass(frozen=True)
class DocumentDuplicates:
    document_id: str
    duplicates: tuple[DuplicateDocument, ...]
    count: int


def _duplicate(data: dict[str, Any]) -> DuplicateDocument:
    return DuplicateDocument(
        id=data["id"],
        filename=data["filename"],
        is_canonical=data["is_canonical"],
        created_at=data["created_at"],
        latest_version_id=data.get("latest_version_id"),
    )


@wire_mapping("document duplicates")
def document_duplicates_from_wire(data: dict[str, Any]) -> DocumentDuplicates:
    return DocumentDuplicates(
        document_id=data["document_id"],
        duplicates=tuple(_duplicate(d) for d in data["duplicates"]),
        count=data["count"],
    )


@wire_mapping("duplicate groups")
def duplicate_groups_from_wire(data: dict[str, Any]) -> DuplicateGroups:
    return DuplicateGroups(
        duplicate_groups=tuple(
            DuplicateGroup(
                content_hash=group["content_hash"],
                canonical_document_id=group["canonical_document_id"],
                canonical_filename=group["canonical_filename"],
                duplicates=tuple(_duplicate(d) for d in group["duplicates"]),
                total_count=group["total_count"],
            )
            for group in data["duplicate_groups"]
        ),
        total_groups=data["total_groups"],
        total_duplicates=data["total_duplicates"],
    )
