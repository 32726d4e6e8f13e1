import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class InMemoryFile:
    """An upload source held in memory instead of on disk."""

    filename: str
    content: bytes
    mime_type: str | None = None


UploadSource = str | os.PathLike[str] | InMemoryFile


@dataclass(frozen=True)
class UploadFile:
    """A resolved upload payload: safe filename, bytes and MIME type."""

    filename: str
    content: bytes
    mime_type: str


@dataclass(frozen=True)
class SubmissionRequest:
    """Multipart body and query string for POST /documents."""

    file: UploadFile
    data: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)

    @property
    def files(self) -> dict[str, tuple[str, bytes, str]]:
        return {"file": (self.file.filename, self.file.content, self.file.mime_type)}
