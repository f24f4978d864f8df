"""
Extractor factory module.

Maps each FormatTag to exactly one extractor class through a fixed
registry.
"""

from docextract.extractors.base import DocumentExtractor
from docextract.extractors.docx_extractor import DocxExtractor
from docextract.extractors.excel_extractor import ExcelExtractor
from docextract.extractors.image_extractor import ImageExtractor
from docextract.extractors.json_extractor import JSONExtractor
from docextract.extractors.pdf_extractor import PDFExtractor
from docextract.extractors.pptx_extractor import PptxExtractor
from docextract.extractors.text_extractor import TextExtractor
from docextract.extractors.xml_extractor import XMLExtractor
from docextract.models import FormatTag

# Registry of all available extractors
_EXTRACTORS: tuple[type[DocumentExtractor], ...] = (
    PDFExtractor,
    DocxExtractor,
    ExcelExtractor,
    PptxExtractor,
    ImageExtractor,
    JSONExtractor,
    XMLExtractor,
    TextExtractor,
)


def get_extractor_class(tag: FormatTag) -> type[DocumentExtractor]:
    """
    Look up the extractor class registered for a format.

    Args:
        tag: Format to extract.

    Returns:
        The DocumentExtractor subclass handling the format.

    Raises:
        LookupError: If no extractor is registered for the tag.
    """
    for extractor_cls in _EXTRACTORS:
        if extractor_cls.supports(tag):
            return extractor_cls
    raise LookupError(f"No extractor registered for format '{tag.value}'")


def create_extractor(tag: FormatTag) -> DocumentExtractor:
    """
    Create the extractor for a given format.

    Args:
        tag: Format to extract; UNKNOWN resolves to the text extractor.

    Returns:
        An instance of the appropriate DocumentExtractor subclass.
    """
    return get_extractor_class(tag.extraction_tag)()
