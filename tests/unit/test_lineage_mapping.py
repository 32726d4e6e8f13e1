import pytest

from raptor.exceptions import MalformedResponseError
from raptor.schema.duplicates import document_duplicates_from_wire, duplicate_groups_from_wire
from raptor.schema.lineage import (
    comparison_from_wire,
    lineage_from_wire,
    lineage_stats_from_wire,
    lineage_tree_from_wire,
)

DOC_ID = "0b6e3f2a-5c1d-4e8f-9a7b-3c2d1e0f9a8b"
CHILD_ID = "9a8b7c6d-5e4f-4321-8765-0fedcba98765"


def _node(doc_id: str, label: str | None = None, children: list | None = None) -> dict:
    return {
        "document": {
            "id": doc_id,
            "filename": "contract.pdf",
            "created_at": "2025-01-01T00:00:00Z",
            "version_label": label,
        },
        "children": children or [],
    }


class TestLineageTree:
    def test_nested_children_are_mapped(self) -> None:
        tree = lineage_tree_from_wire(
            {"total_versions": 2, "roots": [_node(DOC_ID, "v1", [_node(CHILD_ID, "v2")])]}
        )

        root = tree.roots[0]
        assert root.id == DOC_ID
        assert root.children[0].id == CHILD_ID
        assert root.children[0].version_label == "v2"
        assert root.children[0].children == ()

    def test_node_without_document_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="document"):
            lineage_tree_from_wire({"total_versions": 1, "roots": [{"children": []}]})


class TestLineage:
    def test_documents_are_mapped_in_order(self) -> None:
        lineage = lineage_from_wire(
            {
                "lineage_id": "lin-1",
                "total_versions": 2,
                "documents": [
                    {
                        "id": DOC_ID,
                        "filename": "a.pdf",
                        "content_hash": "h1",
                        "created_at": "2025-01-01T00:00:00Z",
                        "file_size_bytes": 10,
                        "is_current": False,
                    },
                    {
                        "id": CHILD_ID,
                        "filename": "a.pdf",
                        "content_hash": "h2",
                        "created_at": "2025-01-02T00:00:00Z",
                        "file_size_bytes": 12,
                        "is_current": True,
                        "parent_document_id": DOC_ID,
                        "similarity_score": 0.93,
                    },
                ],
            }
        )

        assert [d.id for d in lineage.documents] == [DOC_ID, CHILD_ID]
        assert lineage.documents[1].parent_document_id == DOC_ID

    def test_stats_version_refs(self) -> None:
        ref = {"id": DOC_ID, "filename": "a.pdf", "created_at": "2025-01-01T00:00:00Z"}
        stats = lineage_stats_from_wire(
            {
                "total_versions": 1,
                "oldest_version": ref,
                "newest_version": ref,
                "total_size_bytes": 10,
                "avg_similarity": 1.0,
            }
        )

        assert stats.oldest_version.id == DOC_ID
        assert stats.version_labels == ()


class TestComparison:
    def test_diff_counts(self) -> None:
        doc = {
            "id": DOC_ID,
            "filename": "a.pdf",
            "content_hash": "h",
            "created_at": "2025-01-01T00:00:00Z",
            "total_chunks": 3,
        }
        comparison = comparison_from_wire(
            {
                "similarity_score": 0.5,
                "document_1": doc,
                "document_2": {**doc, "id": CHILD_ID},
                "diff": {
                    "added_chunks": ["x"],
                    "removed_chunks": [],
                    "unchanged_chunks": ["y", "z"],
                    "added_count": 1,
                    "removed_count": 0,
                    "unchanged_count": 2,
                    "similarity_score": 0.5,
                },
                "summary": "1 added",
            }
        )

        assert comparison.document_2.id == CHILD_ID
        assert comparison.diff.unchanged_chunks == ("y", "z")


class TestDuplicates:
    def test_document_duplicates(self) -> None:
        result = document_duplicates_from_wire(
            {
                "document_id": DOC_ID,
                "duplicates": [
                    {
                        "id": CHILD_ID,
                        "filename": "copy.pdf",
                        "is_canonical": False,
                        "created_at": "2025-01-01T00:00:00Z",
                    }
                ],
                "count": 1,
            }
        )

        assert result.duplicates[0].latest_version_id is None

    def test_groups_missing_totals_raises(self) -> None:
        with pytest.raises(MalformedResponseError, match="total_groups"):
            duplicate_groups_from_wire({"duplicate_groups": []})
