"""
Extension-based format classification.

Maps the extension of a path's final segment to a FormatTag using a
static lookup table.
"""

import os
from types import MappingProxyType

from docextract.models import FormatTag

EXTENSION_TABLE: MappingProxyType[str, FormatTag] = MappingProxyType(
    {
        "pdf": FormatTag.PDF,
        "docx": FormatTag.DOCX,
        "xlsx": FormatTag.XLSX,
        "xls": FormatTag.XLSX,
        "pptx": FormatTag.PPTX,
        "png": FormatTag.PNG,
        "jpg": FormatTag.JPEG,
        "jpeg": FormatTag.JPEG,
        "tiff": FormatTag.TIFF,
        "tif": FormatTag.TIFF,
        "bmp": FormatTag.BMP,
        "json": FormatTag.JSON,
        "xml": FormatTag.XML,
        "html": FormatTag.XML,
        "txt": FormatTag.TEXT,
        "md": FormatTag.TEXT,
        "markdown": FormatTag.TEXT,
        "csv": FormatTag.TEXT,
    }
)

_SEPARATORS = ("/", "\\")


def supported_extensions() -> tuple[str, ...]:
    """
    Get every extension the classifier recognizes.

    Returns:
        Sorted tuple of lowercase extensions without the leading dot.
    """
    return tuple(sorted(EXTENSION_TABLE))


def extension_of(path: str | os.PathLike[str]) -> str | None:
    """
    Extract the lowercase extension of the final path segment.

    A hidden-file name such as ``.pdf`` has no further dot, so its whole
    trailing token is its extension.

    Args:
        path: File path or name.

    Returns:
        The extension without the dot, or None when there is none.
    """
    name = os.fspath(path)
    if not name or name.endswith(_SEPARATORS):
        return None

    for separator in _SEPARATORS:
        name = name.rpartition(separator)[2]

    _, dot, extension = name.rpartition(".")
    if not dot or not extension:
        return None
    return extension.lower()


def classify_by_name(path: str | os.PathLike[str]) -> FormatTag:
    """
    Classify a path by its extension.

    Args:
        path: File path or name; it does not need to exist.

    Returns:
        The matching FormatTag, or FormatTag.UNKNOWN when the extension is
        missing or unrecognized.
    """
    extension = extension_of(path)
    if extension is None:
        return FormatTag.UNKNOWN
    return EXTENSION_TABLE.get(extension, FormatTag.UNKNOWN)
