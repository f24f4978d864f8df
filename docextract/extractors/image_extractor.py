"""
Image extractor using Pillow and Tesseract OCR.

Pillow decodes PNG, JPEG, BMP and TIFF (including LZW and Deflate
compressed TIFF); pytesseract runs OCR on the decoded pixels.
"""

import io
import threading
from typing import ClassVar

import pytesseract
from PIL import Image

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.models import FormatTag

# Pillow modes that OCR can consume after conversion to RGB or L
_GRAYSCALE_MODES = frozenset({"1", "L", "I", "I;16", "F"})
_PALETTE_MODES = frozenset({"P", "PA"})

# pytesseract only takes the binary path as a module global
_TESSERACT_CMD_LOCK = threading.Lock()


class ImageExtractor(DocumentExtractor):
    """
    Extracts text from raster images via OCR.

    Palette (indexed color) images are rejected instead of being silently
    re-quantized.
    """

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (
        FormatTag.PNG,
        FormatTag.JPEG,
        FormatTag.TIFF,
        FormatTag.BMP,
    )

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Run OCR on an image.

        Args:
            data: Raw image bytes.
            config: Parser configuration; ``ocr_language`` selects the model
                and ``tesseract_cmd`` the binary.

        Returns:
            Recognized text, stripped.

        Raises:
            PIL.UnidentifiedImageError: If the bytes are not a decodable image.
            ValueError: If the pixel format is not supported.
            pytesseract.TesseractError: If OCR fails.
        """
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            prepared = self._prepare(image)

        if config.tesseract_cmd is None:
            text = pytesseract.image_to_string(prepared, lang=config.ocr_language)
        else:
            with _TESSERACT_CMD_LOCK:
                previous = pytesseract.pytesseract.tesseract_cmd
                pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd
                try:
                    text = pytesseract.image_to_string(prepared, lang=config.ocr_language)
                finally:
                    pytesseract.pytesseract.tesseract_cmd = previous
        return text.strip()

    def _prepare(self, image: Image.Image) -> Image.Image:
        """
        Convert decoded pixels to a mode Tesseract accepts.

        Args:
            image: Decoded Pillow image.

        Returns:
            An RGB or L image.

        Raises:
            ValueError: If the image uses indexed/palette color.
        """
        mode = image.mode
        if mode in _PALETTE_MODES:
            raise ValueError(f"Unsupported pixel format: indexed/palette color (mode {mode})")
        if mode == "L":
            return image.copy()
        if mode in _GRAYSCALE_MODES:
            return image.convert("L")
        return image.convert("RGB")
