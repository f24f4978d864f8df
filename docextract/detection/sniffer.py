"""
Content-based format classification.

Inspects the leading bytes of a buffer to infer its FormatTag,
independent of any file name. Checks run in a fixed priority order:
fixed-width binary signatures first, then the ZIP family, then
textual sniffs.
"""

import logging
import os
import struct

from docextract.detection.extension import classify_by_name
from docextract.models import FormatTag

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
BMP_MAGIC = b"BM"
TIFF_LE_MAGIC = b"II*\x00"
TIFF_BE_MAGIC = b"MM\x00*"
OLE_MAGIC = b"\xd0\xcf\x11\xe0"
ZIP_MAGIC = b"PK"

# Ordered: first match wins. OLE also covers legacy .doc files, which are
# folded into the spreadsheet tag.
SIGNATURES: tuple[tuple[bytes, FormatTag], ...] = (
    (PDF_MAGIC, FormatTag.PDF),
    (PNG_MAGIC, FormatTag.PNG),
    (JPEG_MAGIC, FormatTag.JPEG),
    (BMP_MAGIC, FormatTag.BMP),
    (TIFF_LE_MAGIC, FormatTag.TIFF),
    (TIFF_BE_MAGIC, FormatTag.TIFF),
    (OLE_MAGIC, FormatTag.XLSX),
)

# Member-name prefixes that identify an Office Open XML package
OFFICE_MARKERS: tuple[tuple[str, FormatTag], ...] = (
    ("word/", FormatTag.DOCX),
    ("xl/", FormatTag.XLSX),
    ("ppt/", FormatTag.PPTX),
)

ZIP_SCAN_WINDOW = 2000
ZIP_MAX_ENTRIES = 64

_LOCAL_HEADER_SIG = b"PK\x03\x04"
_LOCAL_HEADER = struct.Struct("<4sHHHHHIIIHH")
_DATA_DESCRIPTOR_FLAG = 0x08

_ASCII_WHITESPACE = b" \t\n\r\x0b\x0c"
_UTF8_BOM = b"\xef\xbb\xbf"
_HTML_WINDOW = 14


def classify_by_content(data: bytes) -> FormatTag:
    """
    Classify a byte buffer by its content.

    Never fails: unrecognized content classifies as text, and so does an
    empty buffer (emptiness is validated by the caller).

    Args:
        data: Raw document bytes. Not modified.

    Returns:
        The detected FormatTag.
    """
    if not data:
        return FormatTag.TEXT

    for magic, tag in SIGNATURES:
        if data.startswith(magic):
            return tag

    if data.startswith(ZIP_MAGIC):
        return _classify_office_package(data)

    return _classify_text_like(data)


def resolve_format(
    name: str | os.PathLike[str] | None,
    data: bytes,
    prefer_content: bool = False,
) -> FormatTag:
    """
    Decide the format of named content.

    A recognized extension is trusted and content is only sniffed when the
    extension is unknown. With ``prefer_content`` a definitive content
    signature (anything other than text) overrides the extension.

    Args:
        name: File name or path, if known.
        data: Raw document bytes.
        prefer_content: Let magic bytes override a misleading extension.

    Returns:
        The resolved FormatTag.
    """
    by_name = classify_by_name(name) if name is not None else FormatTag.UNKNOWN

    if prefer_content:
        by_content = classify_by_content(data)
        if by_content is not FormatTag.TEXT:
            if by_name not in (FormatTag.UNKNOWN, by_content):
                logger.debug(
                    "Content signature %s overrides extension of %s (%s)",
                    by_content.value,
                    name,
                    by_name.value,
                )
            return by_content

    if by_name is not FormatTag.UNKNOWN:
        return by_name
    return classify_by_content(data)


def _classify_office_package(data: bytes) -> FormatTag:
    """Disambiguate DOCX / XLSX / PPTX from a ZIP buffer."""
    for member in _iter_zip_member_names(data):
        for marker, tag in OFFICE_MARKERS:
            if member.startswith(marker):
                return tag

    # Streamed archives defer sizes to a data descriptor, so fall back to
    # scanning the leading window for marker text.
    window = data[:ZIP_SCAN_WINDOW]
    for marker, tag in OFFICE_MARKERS:
        if marker.encode("ascii") in window:
            return tag

    return FormatTag.XLSX


def _iter_zip_member_names(data: bytes):
    """Yield member names from the leading ZIP local file headers."""
    offset = 0
    for _ in range(ZIP_MAX_ENTRIES):
        end = offset + _LOCAL_HEADER.size
        if end > len(data):
            return
        (
            signature,
            _version,
            flags,
            _method,
            _mtime,
            _mdate,
            _crc,
            compressed_size,
            _size,
            name_length,
            extra_length,
        ) = _LOCAL_HEADER.unpack_from(data, offset)
        if signature != _LOCAL_HEADER_SIG:
            return

        name = data[end : end + name_length].decode("utf-8", errors="replace")
        yield name

        if flags & _DATA_DESCRIPTOR_FLAG:
            return
        offset = end + name_length + extra_length + compressed_size


def _classify_text_like(data: bytes) -> FormatTag:
    """Sniff markup and JSON after leading whitespace."""
    if data.startswith(_UTF8_BOM):
        data = data[len(_UTF8_BOM) :]
    stripped = data.lstrip(_ASCII_WHITESPACE)
    if not stripped:
        return FormatTag.TEXT

    if stripped.startswith((b"<?xml", b"<!")):
        return FormatTag.XML

    head = stripped[:_HTML_WINDOW].lower()
    if b"<!doctype" in head or b"<html" in head:
        return FormatTag.XML

    if stripped[:1] in (b"{", b"["):
        return FormatTag.JSON

    return FormatTag.TEXT
