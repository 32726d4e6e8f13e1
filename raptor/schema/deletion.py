"""Uniform mapping of deletion outcomes for documents, versions and variants.

A deletion may have two independent side effects reported by the server:

* promotion: a sibling variant or version became the new default because the
  deleted one was the default;
* cascade: dependent entities were removed transitively (for example deleting
  the last variant of a version removes the version).

Either may be absent or ``null``. Absence means the side effect did not happen.
"""

from dataclasses import dataclass
from typing import Any

from raptor.schema.wire import drop_none, wire_mapping


@dataclass(frozen=True)
class PromotionInfo:
    type: str
    id: str
    is_now_default: bool
    version_number: int | None = None


@dataclass(frozen=True)
class CascadeInfo:
    type: str
    id: str
    variants_deleted: int | None = None
    versions_deleted: int | None = None
    chunks_deleted: int | None = None


@dataclass(frozen=True)
class DeletionResult:
    id: str
    type: str
    status: str
    deleted_at: str
    promoted: PromotionInfo | None = None
    cascaded: CascadeInfo | None = None


@wire_mapping("promotion")
def _promotion_from_wire(data: dict[str, Any]) -> PromotionInfo:
    return PromotionInfo(
        type=data["type"],
        id=data["id"],
        is_now_default=data["is_now_default"],
        version_number=data.get("version_number"),
    )


@wire_mapping("cascade")
def _cascade_from_wire(data: dict[str, Any]) -> CascadeInfo:
    return CascadeInfo(
        type=data["type"],
        id=data["id"],
        variants_deleted=data.get("variants_deleted"),
        versions_deleted=data.get("versions_deleted"),
        chunks_deleted=data.get("chunks_deleted"),
    )


@wire_mapping("deletion")
def map_deletion(data: dict[str, Any]) -> DeletionResult:
    """Build a DeletionResult from a DELETE response body.

    Raises:
        MalformedResponseError: if a required field is missing or a present
            promotion/cascade block is not an object.
    """
    promoted = data.get("promoted")
    cascaded = data.get("cascaded")
    return DeletionResult(
        id=data["id"],
        type=data["type"],
        status=data["status"],
        deleted_at=data["deleted_at"],
        promoted=_promotion_from_wire(promoted) if promoted is not None else None,
        cascaded=_cascade_from_wire(cascaded) if cascaded is not None else None,
    )


def deletion_to_wire(result: DeletionResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": result.id,
        "type": result.type,
        "status": result.status,
        "deleted_at": result.deleted_at,
    }
    if result.promoted is not None:
        payload["promoted"] = drop_none(
            {
                "type": result.promoted.type,
                "id": result.promoted.id,
                "version_number": result.promoted.version_number,
                "is_now_default": result.promoted.is_now_default,
            }
        )
    if result.cascaded is not None:
        payload["cascaded"] = drop_none(
            {
                "type": result.cascaded.type,
                "id": result.cascaded.id,
                "variants_deleted": result.cascaded.variants_deleted,
                "versions_deleted": result.cascaded.versions_deleted,
                "chunks_deleted": result.cascaded.chunks_deleted,
            }
        )
    return payload
