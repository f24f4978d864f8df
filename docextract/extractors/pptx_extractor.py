"""
PowerPoint presentation extractor using python-pptx.

Walks every slide in order and collects text frames and table cells.
"""

import io
from typing import Any, ClassVar

from pptx import Presentation

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.models import FormatTag


class PptxExtractor(DocumentExtractor):
    """Extracts slide text from PowerPoint presentations (.pptx)."""

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.PPTX,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Extract text from a presentation.

        Args:
            data: Raw .pptx bytes.
            config: Parser configuration.

        Returns:
            Text of every slide that has any, under a slide header.

        Raises:
            PackageNotFoundError: If the bytes are not a valid .pptx package.
        """
        presentation = Presentation(io.BytesIO(data))
        slide_parts: list[str] = []

        for slide_num, slide in enumerate(presentation.slides, start=1):
            lines: list[str] = []
            for shape in slide.shapes:
                lines.extend(self._shape_lines(shape))
            if lines:
                slide_parts.append(f"=== Slide {slide_num} ===\n" + "\n".join(lines))

        return "\n\n".join(slide_parts)

    def _shape_lines(self, shape: Any) -> list[str]:
        """Collect the non-blank text lines of one shape."""
        if shape.has_text_frame:
            return [
                paragraph.text
                for paragraph in shape.text_frame.paragraphs
                if paragraph.text.strip()
            ]

        if shape.has_table:
            rows: list[str] = []
            for row in shape.table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    rows.append(" | ".join(cells))
            return rows

        return []
