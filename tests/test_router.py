"""
Tests for the dispatch router.

Covers size enforcement, path and bytes entry points, precedence between
extension and content, and classification of backend failures.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from docextract.config import ParserConfig
from docextract.errors import (
    BackendError,
    DocumentNotFoundError,
    EmptyInputError,
    EncodingError,
    SizeExceededError,
    UnreadableFileError,
)
from docextract.models import PDF_NO_TEXT_SENTINEL, FormatTag
from docextract.router import (
    dispatch,
    dispatch_by_bytes,
    dispatch_by_path,
    enforce_size_limit,
    load_path,
    read_path,
)


class TestSizeLimit:
    """Tests for max_size enforcement."""

    def test_input_at_limit_is_accepted(self) -> None:
        """Test that a limit equal to the input size passes."""
        config = ParserConfig(max_size=7)
        assert dispatch_by_bytes(b'{"a":1}', config) == '{\n  "a": 1\n}'

    def test_input_over_limit_is_rejected(self) -> None:
        """Test the documented size error message."""
        config = ParserConfig(max_size=6)

        with pytest.raises(SizeExceededError) as exc_info:
            dispatch_by_bytes(b'{"a":1}', config)

        assert str(exc_info.value) == "File size 7 exceeds maximum allowed size 6"
        assert exc_info.value.size == 7
        assert exc_info.value.limit == 6

    def test_zero_limit_rejects_everything(self) -> None:
        """Test that max_size=0 rejects any non-empty input."""
        with pytest.raises(SizeExceededError):
            enforce_size_limit(1, ParserConfig(max_size=0))

    def test_no_limit_by_default(self) -> None:
        """Test that max_size=None never rejects."""
        enforce_size_limit(10**12, ParserConfig())

    def test_size_checked_before_backend(self) -> None:
        """Test that oversized input never reaches an extractor."""
        config = ParserConfig(max_size=3)

        with patch("docextract.router.create_extractor") as factory:
            with pytest.raises(SizeExceededError):
                dispatch(FormatTag.PDF, b"%PDF-1.7", config)

        factory.assert_not_called()

    def test_same_limit_for_path_and_bytes(self, write_file) -> None:
        """Test that both entry points enforce the limit identically."""
        config = ParserConfig(max_size=4)
        file_path = write_file("notes.txt", b"hello")

        with pytest.raises(SizeExceededError) as by_path:
            dispatch_by_path(file_path, config)
        with pytest.raises(SizeExceededError) as by_bytes:
            dispatch_by_bytes(b"hello", config)

        assert str(by_path.value) == str(by_bytes.value)

    def test_oversized_file_is_not_read(self, write_file) -> None:
        """Test that the file size is checked before its contents are loaded."""
        config = ParserConfig(max_size=4)
        file_path = write_file("big.txt", b"more than four bytes")

        with patch.object(Path, "read_bytes") as read_bytes:
            with pytest.raises(SizeExceededError) as exc_info:
                dispatch_by_path(file_path, config)

        read_bytes.assert_not_called()
        assert exc_info.value.size == 20
        assert exc_info.value.context == str(file_path)

    def test_read_path_limit(self, write_file) -> None:
        """Test that read_path enforces an explicit limit."""
        file_path = write_file("raw.dat", b"12345")

        assert read_path(file_path, max_size=5) == b"12345"
        with pytest.raises(SizeExceededError, match="File size 5 exceeds maximum allowed size 4"):
            read_path(file_path, max_size=4)


class TestDispatchByPath:
    """Tests for the path entry point."""

    def test_text_file(self, write_file, default_config: ParserConfig) -> None:
        """Test extraction of a plain text file."""
        file_path = write_file("notes.md", b"# Notes\nbody\n")
        assert dispatch_by_path(file_path, default_config) == "# Notes\nbody\n"

    @pytest.mark.parametrize(
        ("name", "fixture", "data"),
        [
            ("report.pdf", "pdf_bytes", None),
            ("minutes.docx", "docx_bytes", None),
            ("grades.xlsx", "xlsx_bytes", None),
            ("deck.pptx", "pptx_bytes", None),
            ("data.json", None, b'{"a": [1]}'),
            ("doc.xml", None, b'<?xml version="1.0"?><root><a>Hi</a></root>'),
            ("notes.txt", None, b"plain notes"),
        ],
    )
    def test_path_and_bytes_agree(
        self,
        request: pytest.FixtureRequest,
        write_file,
        default_config: ParserConfig,
        name: str,
        fixture: str | None,
        data: bytes | None,
    ) -> None:
        """Test that a correctly named file gives the same text as its bytes."""
        if fixture is not None:
            data = request.getfixturevalue(fixture)
        file_path = write_file(name, data)

        assert dispatch_by_path(file_path, default_config) == dispatch_by_bytes(
            data, default_config
        )

    def test_unknown_extension_falls_back_to_content(
        self, write_file, xlsx_bytes: bytes, default_config: ParserConfig
    ) -> None:
        """Test that an unrecognized extension is sniffed."""
        file_path = write_file("export.bin", xlsx_bytes)
        assert dispatch_by_path(file_path, default_config).startswith("=== Sheet: Grades ===")

    def test_misleading_extension_with_prefer_content(
        self, write_file, pdf_bytes: bytes, default_config: ParserConfig
    ) -> None:
        """Test that magic bytes win over a wrong extension on request."""
        file_path = write_file("report.txt", pdf_bytes)

        result = dispatch_by_path(file_path, default_config, prefer_content=True)

        assert "Quarterly report for Acme" in result

    def test_misleading_extension_trusted_by_default(
        self, write_file, default_config: ParserConfig
    ) -> None:
        """Test that the extension decides when content is not preferred."""
        file_path = write_file("data.json", b"plain words, not json")
        assert dispatch_by_path(file_path, default_config) == "plain words, not json"

    def test_missing_file(self, temp_dir: Path, default_config: ParserConfig) -> None:
        """Test that a missing path is a not-found error."""
        with pytest.raises(DocumentNotFoundError, match="File does not exist"):
            dispatch_by_path(temp_dir / "missing.pdf", default_config)

    def test_directory(self, temp_dir: Path, default_config: ParserConfig) -> None:
        """Test that a directory is an unreadable-file error."""
        with pytest.raises(UnreadableFileError, match="Path is a directory"):
            dispatch_by_path(temp_dir, default_config)

    def test_empty_file(self, write_file, default_config: ParserConfig) -> None:
        """Test that an empty file is rejected like empty bytes."""
        file_path = write_file("empty.txt", b"")
        with pytest.raises(EmptyInputError, match="File is empty"):
            dispatch_by_path(file_path, default_config)

    def test_load_path_resolves_format(self, write_file) -> None:
        """Test that load_path returns the resolved tag and raw bytes."""
        file_path = write_file("scan.bin", b"%PDF-1.4 rest")
        assert load_path(file_path) == (FormatTag.PDF, b"%PDF-1.4 rest")

    def test_read_path_returns_bytes(self, write_file) -> None:
        """Test that read_path returns the file contents unchanged."""
        file_path = write_file("raw.dat", b"\x00\x01\x02")
        assert read_path(str(file_path)) == b"\x00\x01\x02"


class TestDispatchByBytes:
    """Tests for the bytes entry point."""

    def test_empty_bytes(self, default_config: ParserConfig) -> None:
        """Test the documented empty-data error."""
        with pytest.raises(EmptyInputError, match="Data cannot be empty"):
            dispatch_by_bytes(b"", default_config)

    def test_pdf_bytes(self, pdf_bytes: bytes, default_config: ParserConfig) -> None:
        """Test that PDF bytes are routed to the PDF extractor."""
        assert "Quarterly report for Acme" in dispatch_by_bytes(pdf_bytes, default_config)

    def test_textless_pdf_returns_sentinel(
        self, blank_pdf_bytes: bytes, default_config: ParserConfig
    ) -> None:
        """Test that a PDF without text succeeds with the sentinel message."""
        assert dispatch_by_bytes(blank_pdf_bytes, default_config) == PDF_NO_TEXT_SENTINEL

    def test_pptx_bytes(self, pptx_bytes: bytes, default_config: ParserConfig) -> None:
        """Test that presentation bytes are routed by their package members."""
        assert "Ship version two" in dispatch_by_bytes(pptx_bytes, default_config)

    def test_png_bytes_reach_ocr(self, png_bytes: bytes, default_config: ParserConfig) -> None:
        """Test that image bytes are routed to OCR."""
        with patch(
            "docextract.extractors.image_extractor.pytesseract.image_to_string",
            return_value="Total: 12",
        ):
            assert dispatch_by_bytes(png_bytes, default_config) == "Total: 12"


class TestBackendFailures:
    """Tests for failure classification at the dispatch boundary."""

    def test_corrupt_pdf_has_pdf_prefix(self, default_config: ParserConfig) -> None:
        """Test that PDF backend errors carry the PDF prefix."""
        with pytest.raises(BackendError) as exc_info:
            dispatch(FormatTag.PDF, b"%PDF-1.7 but nothing else", default_config)

        assert str(exc_info.value).startswith("Failed to parse PDF: ")
        assert exc_info.value.format is FormatTag.PDF
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_corrupt_zip_has_excel_prefix(self, default_config: ParserConfig) -> None:
        """Test that an unreadable ZIP sniffed as a workbook fails as Excel."""
        with pytest.raises(BackendError, match="^Failed to parse Excel file: "):
            dispatch_by_bytes(b"PK\x03\x04 truncated", default_config)

    def test_palette_image_has_image_prefix(
        self, palette_png_bytes: bytes, default_config: ParserConfig
    ) -> None:
        """Test that unsupported pixel formats fail as image errors."""
        with pytest.raises(BackendError, match="^Failed to load image: Unsupported pixel format"):
            dispatch_by_bytes(palette_png_bytes, default_config)

    def test_strict_decoding_failure(self, strict_config: ParserConfig) -> None:
        """Test that strict-mode decoding failures are encoding errors."""
        with pytest.raises(EncodingError, match="^Failed to decode text: "):
            dispatch(FormatTag.TEXT, b"caf\xe9", strict_config)

    def test_strict_json_depth_failure(self) -> None:
        """Test that JSON depth failures carry the JSON prefix."""
        config = ParserConfig(strict_mode=True, max_depth=1)
        with pytest.raises(BackendError, match="^Failed to parse JSON: nesting depth"):
            dispatch_by_bytes(b"[[1]]", config)

    def test_failure_is_logged(
        self, caplog: pytest.LogCaptureFixture, default_config: ParserConfig
    ) -> None:
        """Test that classified failures are logged once at warning level."""
        caplog.set_level(logging.WARNING, logger="docextract.router")

        with pytest.raises(BackendError):
            dispatch(FormatTag.DOCX, b"not a package", default_config)

        records = [r for r in caplog.records if r.name == "docextract.router"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "Failed to parse DOCX file: " in records[0].getMessage()

    def test_unknown_tag_degrades_to_text(self, default_config: ParserConfig) -> None:
        """Test that UNKNOWN input is decoded as text."""
        assert dispatch(FormatTag.UNKNOWN, b"misc", default_config) == "misc"

    def test_extractor_construction_failure_is_classified(
        self, default_config: ParserConfig
    ) -> None:
        """Test that errors raised while building an extractor are backend errors."""
        with patch("docextract.router.create_extractor", side_effect=RuntimeError("no backend")):
            with pytest.raises(BackendError, match="^Failed to parse PDF: no backend") as exc_info:
                dispatch(FormatTag.PDF, b"%PDF-1.7", default_config)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
