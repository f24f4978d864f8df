"""
docextract - unified text extraction over heterogeneous document formats.

Callers pass a file path or raw bytes and get text back, without knowing
the format ahead of time. PDF, Word, Excel, PowerPoint, images (OCR),
JSON, XML/HTML and plain text are supported.
"""

import os
from typing import Any

from docextract.config import ParserConfig, Settings, get_settings
from docextract.errors import (
    BackendError,
    DocumentNotFoundError,
    EmptyInputError,
    EncodingError,
    ExtractionError,
    FileAccessError,
    SizeExceededError,
    UnreadableFileError,
    UnsupportedFormatError,
)
from docextract.models import ExtractedDocument, FormatTag
from docextract.parser import BytesLike, Parser

__version__ = "1.0.0"


def parse(input: str, **options: Any) -> str:
    """Clean a text input with a parser built from ``options``."""
    return Parser(**options).parse(input)


def parse_file(path: str | os.PathLike[str], **options: Any) -> str:
    """Extract text from a file with a parser built from ``options``."""
    return Parser(**options).parse_file(path)


def parse_bytes(data: BytesLike, **options: Any) -> str:
    """Extract text from bytes with a parser built from ``options``."""
    return Parser(**options).parse_bytes(data)


detect_format = Parser.detect_format
detect_format_from_bytes = Parser.detect_format_from_bytes
supports = Parser.supports
supported_formats = Parser.supported_formats

__all__ = [
    "BackendError",
    "DocumentNotFoundError",
    "EmptyInputError",
    "EncodingError",
    "ExtractedDocument",
    "ExtractionError",
    "FileAccessError",
    "FormatTag",
    "Parser",
    "ParserConfig",
    "Settings",
    "SizeExceededError",
    "UnreadableFileError",
    "UnsupportedFormatError",
    "detect_format",
    "detect_format_from_bytes",
    "get_settings",
    "parse",
    "parse_bytes",
    "parse_file",
    "supported_formats",
    "supports",
]
