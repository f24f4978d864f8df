"""
XML and HTML extractor using BeautifulSoup.

Strips markup and returns the text content. HTML documents go through the
``html.parser`` tree builder with script and style content dropped; all
other markup goes through the lxml XML builder, where element names carry
no HTML meaning. Both builders recover from malformed input.
"""

import logging
import re
from typing import ClassVar

from bs4 import BeautifulSoup, CData, NavigableString, Tag

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.extractors.text_extractor import decode_text
from docextract.models import FormatTag

logger = logging.getLogger(__name__)

# HTML elements whose content is never document text
_SKIPPED_HTML_TAGS = ("script", "style", "noscript")
_HTML_MARKER = re.compile(r"<!doctype\s+html|<html[\s>/]", re.IGNORECASE)
_HTML_SCAN_CHARS = 1024
_TEXT_TYPES = (NavigableString, CData)


def is_html(markup: str) -> bool:
    """Check for an HTML doctype or <html> root near the start of the markup."""
    return _HTML_MARKER.search(markup, 0, _HTML_SCAN_CHARS) is not None


class XMLExtractor(DocumentExtractor):
    """Extracts text content from XML and HTML documents."""

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.XML,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Strip markup and join text nodes.

        Args:
            data: Raw markup bytes.
            config: Parser configuration; ``max_depth`` bounds traversal.

        Returns:
            Text nodes, stripped and separated by single spaces.

        Raises:
            ValueError: If elements nest deeper than ``max_depth`` in strict mode.
        """
        text = decode_text(data, config)

        if is_html(text):
            soup = BeautifulSoup(text, "html.parser")
            for element in soup(_SKIPPED_HTML_TAGS):
                element.decompose()
        else:
            soup = BeautifulSoup(text, features="xml")

        return " ".join(self._collect_text(soup, config))

    def _collect_text(self, root: Tag, config: ParserConfig) -> list[str]:
        """
        Walk the tree in document order, honoring the depth limit.

        Args:
            root: Parsed document.
            config: Parser configuration.

        Returns:
            Stripped, non-empty text nodes.
        """
        texts: list[str] = []
        truncated = False
        stack: list[tuple[Tag | NavigableString, int]] = [
            (child, 1) for child in reversed(root.contents)
        ]

        while stack:
            node, depth = stack.pop()
            if isinstance(node, Tag):
                if depth > config.max_depth:
                    if config.strict_mode:
                        raise ValueError(
                            f"element <{node.name}> exceeds max_depth {config.max_depth}"
                        )
                    truncated = True
                    continue
                stack.extend((child, depth + 1) for child in reversed(node.contents))
            elif type(node) in _TEXT_TYPES:
                text = node.strip()
                if text:
                    texts.append(text)

        if truncated:
            logger.debug("Skipped markup nested deeper than max_depth %d", config.max_depth)
        return texts
