"""
Base classes for document extraction.

Defines the abstract interface that all extractors must implement,
ensuring consistent behavior across different file formats.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from docextract.config import ParserConfig
from docextract.models import FormatTag


class DocumentExtractor(ABC):
    """
    Abstract base class for document extractors.

    Extractors work on in-memory bytes so that the path and bytes entry
    points share one code path. They raise their backend's own exceptions;
    the router classifies them.
    """

    # Class variable: each subclass must override with the tags it handles
    FORMATS: ClassVar[tuple[FormatTag, ...]] = ()

    @classmethod
    def supports(cls, tag: FormatTag) -> bool:
        """
        Check if this extractor handles the given format.

        Args:
            tag: Format tag to check.

        Returns:
            True if this extractor can handle the format.
        """
        return tag in cls.FORMATS

    @abstractmethod
    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Extract text content from the document bytes.

        Args:
            data: Raw document bytes. Must not be modified.
            config: Parser configuration (read-only).

        Returns:
            The extracted text, possibly empty.

        Raises:
            NoExtractableText: If the document is valid but holds no text.
            Exception: Any backend failure; classified by the router.
        """
        ...
