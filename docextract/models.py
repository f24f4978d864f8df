"""
Pydantic models and enums shared across docextract.

These models define:
- The closed set of format tags every input resolves to
- The extraction result returned by the document-level operations
"""

from datetime import datetime
from enum import Enum
from hashlib import sha256

from pydantic import BaseModel, ConfigDict, Field, computed_field


class FormatTag(str, Enum):
    """Content kind a path or byte buffer resolves to before dispatch."""

    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    PNG = "png"
    JPEG = "jpeg"
    TIFF = "tiff"
    BMP = "bmp"
    JSON = "json"
    XML = "xml"
    TEXT = "text"
    UNKNOWN = "unknown"

    @property
    def extraction_tag(self) -> "FormatTag":
        """Tag whose extractor handles this content (unknown degrades to text)."""
        if self is FormatTag.UNKNOWN:
            return FormatTag.TEXT
        return self


# Informational results returned in place of extracted text
PDF_NO_TEXT_SENTINEL = "PDF contains no extractable text (might be scanned/image-based)"

SENTINEL_MESSAGES: frozenset[str] = frozenset({PDF_NO_TEXT_SENTINEL})


# ==============================================================================
# Extraction Models
# ==============================================================================


class ExtractedDocument(BaseModel):
    """
    Result of extracting text from a document.

    Contains the extracted text and metadata about the source.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    content: str = Field(
        ...,
        description="Extracted text content",
    )

    format: FormatTag = Field(
        ...,
        description="Format tag the input was dispatched as",
    )

    source: str = Field(
        default="<bytes>",
        description="Path of the source document, or '<bytes>' for in-memory input",
    )

    byte_count: int = Field(
        ...,
        ge=0,
        description="Size of the raw input in bytes",
    )

    extraction_timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the extraction was performed",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def character_count(self) -> int:
        """Number of characters in extracted content."""
        return len(self.content)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def content_hash(self) -> str:
        """SHA-256 of the content for verification."""
        return sha256(self.content.encode("utf-8")).hexdigest()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """Check if extracted content is empty or whitespace-only."""
        return len(self.content.strip()) == 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sentinel(self) -> bool:
        """True when the content is an informational message, not document text."""
        return self.content in SENTINEL_MESSAGES
