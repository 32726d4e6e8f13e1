from unittest.mock import MagicMock

import pytest

from raptor.exceptions import ValidationError
from raptor.schema.models import ProcessingConfig
from raptor.submission.builder import SubmissionBuilder, encode_form_value
from raptor.submission.models import InMemoryFile, UploadFile

PARENT_ID = "0b6e3f2a-5c1d-4e8f-9a7b-3c2d1e0f9a8b"


def _source() -> InMemoryFile:
    return InMemoryFile("report.pdf", b"%PDF")


class TestFormEncoding:
    def test_booleans_are_lowercase(self) -> None:
        assert encode_form_value(True) == "true"
        assert encode_form_value(False) == "false"

    def test_numbers_are_stringified(self) -> None:
        assert encode_form_value(0) == "0"
        assert encode_form_value(0.75) == "0.75"


class TestBuildBody:
    def test_empty_config_sends_only_file(self) -> None:
        request = SubmissionBuilder().build(_source(), ProcessingConfig())

        assert request.data == {}
        assert request.query == {}
        assert request.files == {"file": ("report.pdf", b"%PDF", "application/pdf")}

    def test_explicit_falsy_values_are_sent(self) -> None:
        config = ProcessingConfig(
            chunk_overlap=0,
            process_images=False,
            table_extraction=False,
            store_content=False,
            min_chunk_quality=0.0,
        )

        request = SubmissionBuilder().build(_source(), config)

        assert request.data == {
            "chunk_overlap": "0",
            "process_images": "false",
            "table_extraction": "false",
            "store_content": "false",
            "min_chunk_quality": "0.0",
        }

    def test_strategy_passed_through(self) -> None:
        request = SubmissionBuilder().build(_source(), ProcessingConfig(strategy="fixed"))

        assert request.data == {"strategy": "fixed"}

    def test_out_of_range_quality_raises_before_loading(self) -> None:
        loader = MagicMock()

        with pytest.raises(ValidationError):
            SubmissionBuilder(loader).build(_source(), ProcessingConfig(min_chunk_quality=1.5))

        loader.load.assert_not_called()


class TestBuildQuery:
    def test_link_options_go_to_query(self) -> None:
        request = SubmissionBuilder().build(
            _source(),
            ProcessingConfig(),
            parent_document_id=PARENT_ID,
            version_label="v2",
            auto_link=False,
            auto_link_threshold=0.85,
        )

        assert request.query == {
            "parent_document_id": PARENT_ID,
            "version_label": "v2",
            "auto_link": "false",
            "auto_link_threshold": "0.85",
        }

    def test_threshold_out_of_range_raises(self) -> None:
        with pytest.raises(ValidationError):
            SubmissionBuilder().build(_source(), ProcessingConfig(), auto_link_threshold=-0.1)

    def test_uses_injected_loader(self) -> None:
        loader = MagicMock()
        loader.load.return_value = UploadFile("x.txt", b"x", "text/plain")

        request = SubmissionBuilder(loader).build("ignored.txt", ProcessingConfig())

        loader.load.assert_called_once_with("ignored.txt")
        assert request.file.filename == "x.txt"
