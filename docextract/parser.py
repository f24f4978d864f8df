"""
Parser facade.

A Parser pairs the detection and dispatch functions with one immutable
ParserConfig. It holds no other state, so a single instance can be shared
freely between threads.
"""

import os
from pathlib import Path
from typing import Any

from docextract.config import ParserConfig, Settings
from docextract.detection import (
    classify_by_content,
    classify_by_name,
    supported_extensions,
)
from docextract.errors import EmptyInputError, UnsupportedFormatError
from docextract.extractors.image_extractor import ImageExtractor
from docextract.models import ExtractedDocument, FormatTag
from docextract.router import (
    dispatch,
    dispatch_by_bytes,
    dispatch_by_path,
    enforce_size_limit,
    load_path,
)

BytesLike = bytes | bytearray | memoryview


def _as_bytes(data: BytesLike) -> bytes:
    # Copy mutable buffers so the caller cannot change them mid-extraction
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}")


class Parser:
    """
    Unified text extraction over every supported format.

    Example:
        >>> parser = Parser(max_size=10 * 1024 * 1024)
        >>> parser.parse_bytes(b'{"a":1}')
        '{\\n  "a": 1\\n}'
    """

    def __init__(self, config: ParserConfig | None = None, **options: Any):
        """
        Initialize the parser.

        Args:
            config: Complete configuration. Mutually exclusive with options.
            **options: ParserConfig fields (strict_mode, max_depth, max_size,
                encoding, ocr_language) used when no config is given.
        """
        if config is not None and options:
            raise TypeError("Pass either a ParserConfig or keyword options, not both")
        self._config = config if config is not None else ParserConfig(**options)

    @classmethod
    def strict(cls, **options: Any) -> "Parser":
        """Create a parser with strict mode enabled."""
        return cls(**{**options, "strict_mode": True})

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Parser":
        """Create a parser configured from environment settings."""
        return cls(ParserConfig.from_settings(settings))

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def strict_mode(self) -> bool:
        return self._config.strict_mode

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config!r})"

    # ==========================================================================
    # Text extraction
    # ==========================================================================

    def parse(self, input: str) -> str:
        """
        Clean a text input.

        Args:
            input: Text to parse.

        Returns:
            The text with surrounding whitespace removed.

        Raises:
            EmptyInputError: If the input is empty.
            SizeExceededError: If its UTF-8 size exceeds ``max_size``.
        """
        if not isinstance(input, str):
            raise TypeError(f"Expected str, got {type(input).__name__}")
        if not input:
            raise EmptyInputError("Input cannot be empty", context="<text>")

        enforce_size_limit(len(input.encode("utf-8")), self._config, context="<text>")
        return input.strip()

    def parse_file(self, path: str | os.PathLike[str], prefer_content: bool = False) -> str:
        """
        Extract text from a file.

        Args:
            path: Path to the document.
            prefer_content: Let magic bytes override a misleading extension.

        Returns:
            The extracted text.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            UnreadableFileError: If the path is a directory or unreadable.
            EmptyInputError: If the file is empty.
            SizeExceededError: If the file exceeds ``max_size``.
            BackendError: If the format's backend fails.
        """
        return dispatch_by_path(path, self._config, prefer_content)

    def parse_bytes(self, data: BytesLike) -> str:
        """
        Extract text from an in-memory document.

        Args:
            data: Raw document bytes.

        Returns:
            The extracted text.

        Raises:
            EmptyInputError: If the buffer is empty.
            SizeExceededError: If the buffer exceeds ``max_size``.
            BackendError: If the format's backend fails.
        """
        return dispatch_by_bytes(_as_bytes(data), self._config)

    def extract_file(
        self, path: str | os.PathLike[str], prefer_content: bool = False
    ) -> ExtractedDocument:
        """
        Extract a file into an ExtractedDocument with source metadata.

        Raises the same errors as `parse_file`.
        """
        tag, data = load_path(path, prefer_content, max_size=self._config.max_size)
        content = dispatch(tag, data, self._config)
        return ExtractedDocument(
            content=content,
            format=tag,
            source=str(Path(path).resolve()),
            byte_count=len(data),
        )

    def extract_bytes(self, data: BytesLike) -> ExtractedDocument:
        """
        Extract an in-memory document into an ExtractedDocument.

        Raises the same errors as `parse_bytes`.
        """
        buffer = _as_bytes(data)
        content = dispatch_by_bytes(buffer, self._config)
        return ExtractedDocument(
            content=content,
            format=classify_by_content(buffer),
            byte_count=len(buffer),
        )

    # ==========================================================================
    # Format-specific extraction
    # ==========================================================================

    def _parse_as(self, tag: FormatTag, data: BytesLike) -> str:
        buffer = _as_bytes(data)
        if not buffer:
            raise EmptyInputError("Data cannot be empty", context=tag.value)
        return dispatch(tag, buffer, self._config)

    def parse_pdf(self, data: BytesLike) -> str:
        """
        Extract text from PDF bytes, skipping format detection.

        Args:
            data: Raw PDF bytes.

        Returns:
            The text of every page, or the no-text sentinel for a PDF
            without a text layer.

        Raises:
            EmptyInputError: If the buffer is empty.
            SizeExceededError: If the buffer exceeds ``max_size``.
            BackendError: If the bytes are not a readable PDF.
        """
        return self._parse_as(FormatTag.PDF, data)

    def parse_docx(self, data: BytesLike) -> str:
        """Extract paragraphs and tables from DOCX bytes."""
        return self._parse_as(FormatTag.DOCX, data)

    def parse_xlsx(self, data: BytesLike) -> str:
        """Extract sheet-qualified cell text from XLSX or legacy XLS bytes."""
        return self._parse_as(FormatTag.XLSX, data)

    def parse_pptx(self, data: BytesLike) -> str:
        """Extract slide text from PPTX bytes."""
        return self._parse_as(FormatTag.PPTX, data)

    def parse_json(self, data: BytesLike) -> str:
        """Pretty-print JSON bytes, or return them as text when invalid."""
        return self._parse_as(FormatTag.JSON, data)

    def parse_xml(self, data: BytesLike) -> str:
        """Strip markup from XML or HTML bytes."""
        return self._parse_as(FormatTag.XML, data)

    def parse_text(self, data: BytesLike) -> str:
        """Decode text bytes under the configured encoding."""
        return self._parse_as(FormatTag.TEXT, data)

    def ocr_image(self, data: BytesLike) -> str:
        """
        Run OCR on image bytes.

        The image container is sniffed so the right decoder is named in
        errors; unrecognized bytes are attempted as PNG.

        Args:
            data: Raw PNG, JPEG, TIFF or BMP bytes.

        Returns:
            Recognized text.

        Raises:
            EmptyInputError: If the buffer is empty.
            SizeExceededError: If the buffer exceeds ``max_size``.
            BackendError: If the image cannot be decoded or OCR fails.
        """
        buffer = _as_bytes(data)
        tag = classify_by_content(buffer)
        if tag not in ImageExtractor.FORMATS:
            tag = FormatTag.PNG
        return self._parse_as(tag, buffer)

    # ==========================================================================
    # Format detection
    # ==========================================================================

    @staticmethod
    def detect_format(path: str | os.PathLike[str]) -> FormatTag:
        """Classify a path by its extension; the file need not exist."""
        return classify_by_name(path)

    @staticmethod
    def detect_format_from_bytes(data: BytesLike) -> FormatTag:
        """Classify a buffer by its content."""
        return classify_by_content(_as_bytes(data))

    @staticmethod
    def supports(path: str | os.PathLike[str]) -> bool:
        """Check whether a path's extension maps to a known format."""
        return classify_by_name(path) is not FormatTag.UNKNOWN

    @staticmethod
    def supported_formats() -> frozenset[str]:
        """Get the supported file extensions, without leading dots."""
        return frozenset(supported_extensions())

    @staticmethod
    def ensure_supported(path: str | os.PathLike[str]) -> FormatTag:
        """
        Require a path to have a known format.

        Dispatch degrades unknown content to text; callers that need to refuse
        such input check it up front with this method.

        Args:
            path: File path or name.

        Returns:
            The detected FormatTag.

        Raises:
            UnsupportedFormatError: If the extension is missing or unrecognized.
        """
        tag = classify_by_name(path)
        if tag is FormatTag.UNKNOWN:
            supported = ", ".join(supported_extensions())
            raise UnsupportedFormatError(
                f"Unsupported file format for '{path}'. Supported formats: {supported}",
                context=str(path),
            )
        return tag

    def is_valid_file(self, path: str | os.PathLike[str]) -> bool:
        """Check that a path is an existing file with a supported extension."""
        return Path(path).is_file() and self.supports(path)
