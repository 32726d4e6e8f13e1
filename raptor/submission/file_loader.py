import os
from pathlib import Path

from raptor.exceptions import InvalidFilenameError, InvalidSourceError
from raptor.submission.mime_types import guess_mime_type
from raptor.submission.models import InMemoryFile, UploadFile, UploadSource

_TRAVERSAL_MARKERS = ("..", "/", "\\")


def validate_filename(filename: str) -> str:
    """Reject empty names and names carrying path-traversal sequences."""
    if not filename or any(marker in filename for marker in _TRAVERSAL_MARKERS):
        raise InvalidFilenameError(f"Invalid filename detected: {filename!r}")
    return filename


class FileLoader:
    """Resolves an upload source into bytes, a safe filename and a MIME type."""

    def load(self, source: UploadSource) -> UploadFile:
        """Read the source.

        Raises:
            InvalidSourceError: if a path does not exist, is not a regular file,
                or cannot be read.
            InvalidFilenameError: if the resolved filename is unsafe.
        """
        if isinstance(source, InMemoryFile):
            filename = validate_filename(source.filename)
            return UploadFile(
                filename=filename,
                content=source.content,
                mime_type=source.mime_type or guess_mime_type(filename),
            )
        if isinstance(source, (str, os.PathLike)):
            return self._load_path(Path(source))
        raise InvalidSourceError(
            f"Unsupported upload source type: {type(source).__name__}"
        )

    def _load_path(self, path: Path) -> UploadFile:
        if not path.exists():
            raise InvalidSourceError(f"File not found: {path}")
        if not path.is_file():
            raise InvalidSourceError(f"Path is not a file: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise InvalidSourceError(f"Failed to read file {path}: {exc}") from exc
        filename = validate_filename(path.name)
        return UploadFile(filename=filename, content=content, mime_type=guess_mime_type(filename))
