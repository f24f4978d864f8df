"""
JSON extractor.

Pretty-prints valid JSON; anything that does not parse as standard JSON,
including the NaN and Infinity literals, is returned as the decoded text
so JSON-looking prose is never lost.
"""

import json
import logging
from typing import Any, ClassVar

from docextract.config import ParserConfig
from docextract.extractors.base import DocumentExtractor
from docextract.extractors.text_extractor import decode_text
from docextract.models import FormatTag

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def json_depth(value: Any, limit: int) -> int:
    """
    Measure the container nesting depth of a decoded JSON value.

    Scalars have depth 0; stops counting once ``limit`` is exceeded.
    """
    deepest = 0
    stack: list[tuple[Any, int]] = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth += 1
        deepest = max(deepest, depth)
        if deepest > limit:
            return deepest
        stack.extend((child, depth) for child in children)
    return deepest


class JSONExtractor(DocumentExtractor):
    """Extracts pretty-printed text from JSON documents."""

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.JSON,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Pretty-print JSON.

        Args:
            data: Raw JSON bytes.
            config: Parser configuration; ``max_depth`` bounds nesting.

        Returns:
            Two-space indented JSON, or the raw text when it is not valid JSON.

        Raises:
            ValueError: If nesting exceeds ``max_depth`` in strict mode.
        """
        text = decode_text(data, config)

        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            logger.debug("Input is not valid JSON, returning raw text")
            return text

        depth = json_depth(value, config.max_depth)
        if depth > config.max_depth:
            if config.strict_mode:
                raise ValueError(
                    f"nesting depth exceeds max_depth {config.max_depth}"
                )
            logger.debug("JSON nesting exceeds max_depth %d, returning raw text", config.max_depth)
            return text

        return json.dumps(value, indent=2, ensure_ascii=False)
