"""
Word document extractor using python-docx.

Body paragraphs and tables are read in document order.
"""

import io
from typing import ClassVar

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.models import FormatTag


class DocxExtractor(DocumentExtractor):
    """
    Extracts text content from Word documents (.docx).

    Tables are rendered as a ``TABLE:`` block with one ``|``-separated
    line per row; horizontally merged cells appear once.
    """

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.DOCX,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Extract text from a Word document.

        Args:
            data: Raw .docx bytes.
            config: Parser configuration.

        Returns:
            Body blocks separated by blank lines; empty for a blank document.

        Raises:
            PackageNotFoundError: If the bytes are not a valid .docx package.
        """
        document = Document(io.BytesIO(data))
        blocks: list[str] = []

        for block in document.iter_inner_content():
            if isinstance(block, Paragraph):
                text = block.text
                if text.strip():
                    blocks.append(text)
            elif isinstance(block, Table):
                rendered = _render_table(block)
                if rendered:
                    blocks.append(rendered)

        return "\n\n".join(blocks)


def _render_table(table: Table) -> str:
    lines: list[str] = []

    for row in table.rows:
        seen: set[int] = set()
        cells: list[str] = []
        for cell in row.cells:
            # Merged cells are returned once per grid column they span
            if id(cell._tc) in seen:
                continue
            seen.add(id(cell._tc))
            cells.append(cell.text.strip())
        if any(cells):
            lines.append(" | ".join(cells))

    if not lines:
        return ""
    return "TABLE:\n" + "\n".join(lines)
