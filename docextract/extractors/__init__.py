"""
Document Extraction Module.

One extractor per format family, all working on in-memory bytes:
- PDF (PyMuPDF)
- Word, Excel, PowerPoint (python-docx, openpyxl/pandas, python-pptx)
- Images via OCR (Pillow + pytesseract)
- JSON, XML/HTML, plain text
"""

from docextract.extractors.base import DocumentExtractor
from docextract.extractors.factory import create_extractor, get_extractor_class

__all__ = [
    "DocumentExtractor",
    "create_extractor",
    "get_extractor_class",
]
