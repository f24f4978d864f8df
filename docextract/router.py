"""
Dispatch router.

Routes a classified input to its extractor. The size limit is enforced
here, once, so the path and bytes entry points and every format get the
same treatment; backend failures are classified before they leave.
"""

import logging
import os
from pathlib import Path

from docextract.config import ParserConfig
from docextract.detection import classify_by_content, resolve_format
from docextract.errors import (
    DocumentNotFoundError,
    EmptyInputError,
    ExtractionError,
    SizeExceededError,
    UnreadableFileError,
    classify_backend_error,
    is_informational,
)
from docextract.extractors import create_extractor
from docextract.models import FormatTag

logger = logging.getLogger(__name__)


def enforce_size_limit(size: int, config: ParserConfig, context: str = "") -> None:
    """
    Check an input size against the configured maximum.

    Args:
        size: Input length in bytes.
        config: Parser configuration.
        context: Description of the input for the error.

    Raises:
        SizeExceededError: If ``size`` is greater than ``config.max_size``.
    """
    if config.max_size is not None and size > config.max_size:
        raise SizeExceededError(size, config.max_size, context=context)


def dispatch(tag: FormatTag, data: bytes, config: ParserConfig) -> str:
    """
    Extract text from classified bytes.

    Args:
        tag: Format the bytes were classified as.
        data: Raw document bytes. Not modified or retained.
        config: Parser configuration.

    Returns:
        The extracted text, or a sentinel message for a valid document
        without text.

    Raises:
        SizeExceededError: If the input is larger than ``max_size``.
        BackendError: If the extractor fails (message carries the family prefix).
        EncodingError: If text is invalid under the encoding in strict mode.
    """
    enforce_size_limit(len(data), config, context=tag.value)

    try:
        extractor = create_extractor(tag)
        logger.debug(
            "Dispatching %d bytes as %s to %s", len(data), tag.value, type(extractor).__name__
        )
        return extractor.extract(data, config)
    except ExtractionError:
        raise
    except Exception as e:
        if is_informational(e):
            logger.info("No extractable text in %s input", tag.value)
            return e.sentinel
        error = classify_backend_error(tag, e)
        logger.warning("%s", error)
        raise error from e


def read_path(path: str | os.PathLike[str], max_size: int | None = None) -> bytes:
    """
    Read a document from disk.

    Args:
        path: Path to the document.
        max_size: Refuse files larger than this many bytes without reading them.

    Returns:
        The file's bytes.

    Raises:
        DocumentNotFoundError: If the path does not exist.
        UnreadableFileError: If the path is a directory or cannot be read.
        SizeExceededError: If the file is larger than ``max_size``.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise DocumentNotFoundError(f"File does not exist: {path}", context=str(path))

    if file_path.is_dir():
        raise UnreadableFileError(f"Path is a directory: {path}", context=str(path))

    try:
        if max_size is not None:
            size = file_path.stat().st_size
            if size > max_size:
                raise SizeExceededError(size, max_size, context=str(path))
        return file_path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(
            f"Failed to read file: {e}", context=str(path), cause=e
        ) from e


def dispatch_by_path(
    path: str | os.PathLike[str],
    config: ParserConfig,
    prefer_content: bool = False,
) -> str:
    """
    Extract text from a file.

    The extension decides the format; content is sniffed only when the
    extension is unknown, or first when ``prefer_content`` is set.

    Args:
        path: Path to the document.
        config: Parser configuration.
        prefer_content: Let magic bytes override a misleading extension.

    Returns:
        The extracted text.

    Raises:
        DocumentNotFoundError, UnreadableFileError: If the file cannot be read.
        EmptyInputError: If the file is empty.
        SizeExceededError, BackendError, EncodingError: See `dispatch`.
    """
    tag, data = load_path(path, prefer_content, max_size=config.max_size)
    return dispatch(tag, data, config)


def dispatch_by_bytes(data: bytes, config: ParserConfig) -> str:
    """
    Extract text from an in-memory buffer classified by content alone.

    Args:
        data: Raw document bytes.
        config: Parser configuration.

    Returns:
        The extracted text.

    Raises:
        EmptyInputError: If the buffer is empty.
        SizeExceededError, BackendError, EncodingError: See `dispatch`.
    """
    if not data:
        raise EmptyInputError("Data cannot be empty", context="<bytes>")
    return dispatch(classify_by_content(data), data, config)


def load_path(
    path: str | os.PathLike[str],
    prefer_content: bool = False,
    max_size: int | None = None,
) -> tuple[FormatTag, bytes]:
    """
    Read a file and resolve its format.

    Args:
        path: Path to the document.
        prefer_content: Let magic bytes override a misleading extension.
        max_size: Refuse larger files before reading them.

    Returns:
        Tuple of (format tag, file bytes).
    """
    data = read_path(path, max_size)
    if not data:
        raise EmptyInputError(f"File is empty: {path}", context=str(path))
    return resolve_format(path, data, prefer_content), data
