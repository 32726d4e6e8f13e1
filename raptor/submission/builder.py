from dataclasses import fields

from raptor.schema.models import ProcessingConfig
from raptor.submission.file_loader import FileLoader
from raptor.submission.models import SubmissionRequest, UploadSource
from raptor.validators import require_unit_interval


def encode_form_value(value: bool | int | float | str) -> str:
    """Encode a config value the way the API's form parser expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SubmissionBuilder:
    """Builds the multipart body and query string for a document upload.

    Only fields the caller actually set are transmitted. ``None`` means "not
    provided"; explicit ``False``, ``0`` and ``""`` are sent as-is so the
    server never falls back to its own default for them.
    """

    def __init__(self, file_loader: FileLoader | None = None) -> None:
        self._file_loader = file_loader or FileLoader()

    def build(
        self,
        source: UploadSource,
        config: ProcessingConfig,
        *,
        parent_document_id: str | None = None,
        version_label: str | None = None,
        auto_link: bool | None = None,
        auto_link_threshold: float | None = None,
    ) -> SubmissionRequest:
        """Resolve the source and encode config and link options.

        Raises:
            ValidationError: if a score field is outside [0.0, 1.0].
            InvalidSourceError, InvalidFilenameError: from the file loader.
        """
        if config.min_chunk_quality is not None:
            require_unit_interval(config.min_chunk_quality, "min_chunk_quality")
        if auto_link_threshold is not None:
            require_unit_interval(auto_link_threshold, "auto_link_threshold")

        upload = self._file_loader.load(source)
        data = {
            f.name: encode_form_value(getattr(config, f.name))
            for f in fields(ProcessingConfig)
            if getattr(config, f.name) is not None
        }
        query_values = {
            "parent_document_id": parent_document_id,
            "version_label": version_label,
            "auto_link": auto_link,
            "auto_link_threshold": auto_link_threshold,
        }
        query = {
            key: encode_form_value(value)
            for key, value in query_values.items()
            if value is not None
        }
        return SubmissionRequest(file=upload, data=data, query=query)
