"""
Error taxonomy and backend error classification.

Every failure that leaves docextract is one of the exceptions below. Backend
libraries raise their own exception types; `classify_backend_error` wraps them
in a message carrying a fixed per-family prefix so callers can match on the
prefix instead of on library internals.
"""

from types import MappingProxyType
from typing import TypeGuard

from docextract.models import FormatTag


class ExtractionError(Exception):
    """
    Base class for all docextract failures.

    Carries a human-readable message, a format-specific context string,
    and the underlying cause when there is one.
    """

    def __init__(self, message: str, context: str = "", cause: Exception | None = None):
        self.message = message
        self.context = context
        self.cause = cause
        super().__init__(message)


class EmptyInputError(ExtractionError):
    """Raised when text or byte input is present but has zero length."""


class FileAccessError(ExtractionError):
    """Raised when a supplied path cannot be used as a document."""


class DocumentNotFoundError(FileAccessError):
    """Raised when a supplied path does not exist."""


class UnreadableFileError(FileAccessError):
    """Raised when a path is a directory or cannot be opened."""


class UnsupportedFormatError(ExtractionError):
    """Raised by the opt-in format check when a path has no known format."""


class SizeExceededError(ExtractionError):
    """Raised when input is larger than the configured maximum size."""

    def __init__(self, size: int, limit: int, context: str = ""):
        self.size = size
        self.limit = limit
        super().__init__(
            f"File size {size} exceeds maximum allowed size {limit}",
            context=context,
        )


class BackendError(ExtractionError):
    """Raised when an extraction backend fails on the input."""

    def __init__(
        self,
        message: str,
        format: FormatTag,
        context: str = "",
        cause: Exception | None = None,
    ):
        self.format = format
        super().__init__(message, context=context or format.value, cause=cause)


class EncodingError(BackendError):
    """Raised when bytes are invalid under the configured encoding in strict mode."""


class NoExtractableText(Exception):
    """
    Signal raised by a backend that parsed the input but found no text.

    Not an error: the router turns it into a successful result carrying
    the sentinel message.
    """

    def __init__(self, sentinel: str):
        self.sentinel = sentinel
        super().__init__(sentinel)


_IMAGE_PREFIX = "Failed to load image: "
_TEXT_PREFIX = "Failed to decode text: "

ERROR_PREFIXES: MappingProxyType[FormatTag, str] = MappingProxyType(
    {
        FormatTag.PDF: "Failed to parse PDF: ",
        FormatTag.DOCX: "Failed to parse DOCX file: ",
        FormatTag.XLSX: "Failed to parse Excel file: ",
        FormatTag.PPTX: "Failed to parse PPTX file: ",
        FormatTag.PNG: _IMAGE_PREFIX,
        FormatTag.JPEG: _IMAGE_PREFIX,
        FormatTag.TIFF: _IMAGE_PREFIX,
        FormatTag.BMP: _IMAGE_PREFIX,
        FormatTag.JSON: "Failed to parse JSON: ",
        FormatTag.XML: "Failed to parse XML: ",
        FormatTag.TEXT: _TEXT_PREFIX,
        FormatTag.UNKNOWN: _TEXT_PREFIX,
    }
)


def error_prefix(tag: FormatTag) -> str:
    """Return the fixed message prefix for a backend family."""
    return ERROR_PREFIXES[tag]


def is_informational(raw_error: BaseException) -> TypeGuard[NoExtractableText]:
    """Check whether a backend outcome should be reported as a success."""
    return isinstance(raw_error, NoExtractableText)


def classify_backend_error(tag: FormatTag, raw_error: Exception) -> ExtractionError:
    """
    Map a backend failure to the shared error taxonomy.

    Args:
        tag: Format the backend was invoked for.
        raw_error: Exception raised by the backend.

    Returns:
        An ExtractionError whose message starts with the family prefix
        and ends with the backend's own diagnostic.
    """
    if isinstance(raw_error, ExtractionError):
        return raw_error

    detail = str(raw_error).strip() or type(raw_error).__name__
    message = f"{error_prefix(tag)}{detail}"
    context = f"{tag.value} backend ({type(raw_error).__name__})"

    if isinstance(raw_error, UnicodeError):
        return EncodingError(message, format=tag, context=context, cause=raw_error)
    return BackendError(message, format=tag, context=context, cause=raw_error)
