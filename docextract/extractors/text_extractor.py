"""
Plain text document extractor.

Decodes bytes under the configured encoding, with charset detection as
the fallback outside strict mode.
"""

import codecs
import logging
from typing import ClassVar

from charset_normalizer import from_bytes

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.models import FormatTag

logger = logging.getLogger(__name__)


def decode_text(data: bytes, config: ParserConfig) -> str:
    """
    Decode raw bytes to text.

    Uses the configured encoding first; a UTF-8 byte order mark is dropped.
    Outside strict mode, undecodable input falls back to charset detection
    and finally to replacement characters.

    Args:
        data: Raw bytes.
        config: Parser configuration.

    Returns:
        The decoded text.

    Raises:
        UnicodeDecodeError: If the bytes are invalid and strict mode is on.
    """
    codec = codecs.lookup(config.encoding).name
    if codec == "utf-8":
        codec = "utf-8-sig"

    try:
        return data.decode(codec)
    except UnicodeDecodeError:
        if config.strict_mode:
            raise

    best = from_bytes(data).best()
    if best is not None:
        logger.debug(
            "Input is not valid %s, decoded as detected %s", config.encoding, best.encoding
        )
        return str(best)

    logger.debug("Input is not valid %s, decoding with replacement", config.encoding)
    return data.decode(codec, errors="replace")


class TextExtractor(DocumentExtractor):
    """
    Extracts text from plain text input.

    Also handles content that could not be classified at all.
    """

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.TEXT, FormatTag.UNKNOWN)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Decode plain text.

        Args:
            data: Raw text bytes.
            config: Parser configuration.

        Returns:
            The decoded text, unmodified otherwise.

        Raises:
            UnicodeDecodeError: If the bytes are invalid and strict mode is on.
        """
        return decode_text(data, config)
