"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules. Binary documents are
generated in memory with the same libraries the extractors read them with.
"""

import io
import tempfile
from pathlib import Path
from typing import Generator

import fitz
import pytest
from docx import Document
from openpyxl import Workbook
from PIL import Image
from pptx import Presentation
from pptx.util import Inches

from docextract.config import ParserConfig
from docextract.parser import Parser


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# Configuration Fixtures
# ==============================================================================


@pytest.fixture
def default_config() -> ParserConfig:
    """Default parser configuration."""
    return ParserConfig()


@pytest.fixture
def strict_config() -> ParserConfig:
    """Parser configuration with strict mode enabled."""
    return ParserConfig(strict_mode=True)


@pytest.fixture
def parser() -> Parser:
    """Parser with default configuration."""
    return Parser()


# ==============================================================================
# Document Byte Fixtures
# ==============================================================================


@pytest.fixture
def pdf_bytes() -> bytes:
    """A one-page PDF with a text layer."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Quarterly report for Acme")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """A structurally valid PDF whose only page has no text."""
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes() -> bytes:
    """A Word document with two paragraphs and a table."""
    doc = Document()
    doc.add_paragraph("Meeting notes")
    doc.add_paragraph("Budget approved")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Item"
    table.cell(0, 1).text = "Cost"
    table.cell(1, 0).text = "Laptop"
    table.cell(1, 1).text = "1200"

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes() -> bytes:
    """A workbook with one populated sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Grades"
    sheet.append(["Name", "Score"])
    sheet.append(["Ada", 95])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pptx_bytes() -> bytes:
    """A presentation with one slide holding two text boxes."""
    presentation = Presentation()
    slide = presentation.slides.add_slide(presentation.slide_layouts[6])
    title = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(1))
    title.text_frame.text = "Roadmap"
    body = slide.shapes.add_textbox(Inches(1), Inches(2), Inches(6), Inches(1))
    body.text_frame.text = "Ship version two"

    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


def _image_bytes(mode: str, fmt: str, **save_options: object) -> bytes:
    image = Image.new(mode, (40, 20))
    buffer = io.BytesIO()
    image.save(buffer, fmt, **save_options)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """An RGB PNG image."""
    return _image_bytes("RGB", "PNG")


@pytest.fixture
def palette_png_bytes() -> bytes:
    """A palette (indexed color) PNG image."""
    return _image_bytes("P", "PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    """An RGB JPEG image."""
    return _image_bytes("RGB", "JPEG")


@pytest.fixture
def bmp_bytes() -> bytes:
    """An RGB BMP image."""
    return _image_bytes("RGB", "BMP")


@pytest.fixture
def lzw_tiff_bytes() -> bytes:
    """An LZW-compressed RGB TIFF image."""
    return _image_bytes("RGB", "TIFF", compression="tiff_lzw")


# ==============================================================================
# File Fixtures
# ==============================================================================


@pytest.fixture
def write_file(temp_dir: Path):
    """Factory writing bytes to a named file in the temp directory."""

    def _write(name: str, data: bytes) -> Path:
        file_path = temp_dir / name
        file_path.write_bytes(data)
        return file_path

    return _write
