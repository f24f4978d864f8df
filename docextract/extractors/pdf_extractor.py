"""
PDF document extractor using PyMuPDF.

Opens the document straight from memory and reads the text layer page by
page. Scanned PDFs have no text layer and produce the sentinel result.
"""

from typing import ClassVar

import fitz  # PyMuPDF

from docextract.config import ParserConfig
from docextract.errors import NoExtractableText
from docextract.extractors.base import DocumentExtractor
from docextract.models import PDF_NO_TEXT_SENTINEL, FormatTag


class PDFExtractor(DocumentExtractor):
    """
    Extracts the text layer of PDF documents.

    Pages without text are left out; each remaining page is introduced by
    a page header so page boundaries survive in the output.
    """

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.PDF,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Extract text from PDF bytes.

        Args:
            data: Raw PDF bytes.
            config: Parser configuration.

        Returns:
            The page texts, each under a page header.

        Raises:
            NoExtractableText: If the PDF parses but has no text layer.
            fitz.FileDataError: If the PDF is corrupted or invalid.
        """
        text_parts: list[str] = []

        with fitz.open(stream=data, filetype="pdf") as doc:
            if doc.page_count == 0:
                raise ValueError("PDF has no pages")

            for page_num, page in enumerate(doc, start=1):
                page_text = page.get_text(
                    "text",
                    flags=fitz.TEXT_PRESERVE_WHITESPACE | fitz.TEXT_PRESERVE_LIGATURES,
                )

                if page_text.strip():
                    text_parts.append(f"--- Page {page_num} ---\n{page_text.strip()}")

        if not text_parts:
            raise NoExtractableText(PDF_NO_TEXT_SENTINEL)

        return "\n\n".join(text_parts)
