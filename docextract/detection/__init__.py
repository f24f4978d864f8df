"""
Format Detection Module.

Resolves paths and byte buffers to a FormatTag:
- By file extension (static lookup table)
- By content (ordered magic-byte signatures and textual sniffs)
"""

from docextract.detection.extension import classify_by_name, extension_of, supported_extensions
from docextract.detection.sniffer import SIGNATURES, classify_by_content, resolve_format

__all__ = [
    "SIGNATURES",
    "classify_by_content",
    "classify_by_name",
    "extension_of",
    "resolve_format",
    "supported_extensions",
]
