"""
Excel spreadsheet extractor using openpyxl and pandas.

OLE workbooks (legacy .xls) go through pandas with the xlrd engine;
everything else is opened as an .xlsx package with openpyxl.
"""

import io
from collections.abc import Iterable, Iterator
from typing import Any, ClassVar

import pandas as pd
from openpyxl import load_workbook

from docextract.config import ParserConfig
from docextract.detection.sniffer import OLE_MAGIC
from docextract.extractors.base import DocumentExtractor
from docextract.models import FormatTag


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if value != value:  # NaN from pandas
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def _format_rows(rows: Iterable[Iterable[Any]]) -> Iterator[str]:
    """Yield ``|``-joined rows, skipping blank ones and trailing empty cells."""
    for row in rows:
        cells = [_cell_text(value) for value in row]
        while cells and not cells[-1].strip():
            cells.pop()
        if cells:
            yield " | ".join(cells)


def _render_sheet(name: str, rows: Iterable[Iterable[Any]]) -> str:
    lines = list(_format_rows(rows))
    if not lines:
        return ""
    return f"=== Sheet: {name} ===\n" + "\n".join(lines)


class ExcelExtractor(DocumentExtractor):
    """
    Extracts text content from Excel workbooks.

    Every non-empty sheet is emitted under a header naming the sheet.
    """

    FORMATS: ClassVar[tuple[FormatTag, ...]] = (FormatTag.XLSX,)

    def extract(self, data: bytes, config: ParserConfig) -> str:
        """
        Extract text from an Excel workbook.

        Args:
            data: Raw workbook bytes.
            config: Parser configuration.

        Returns:
            Non-empty sheets separated by blank lines.

        Raises:
            InvalidFileException, BadZipFile: If the .xlsx package is invalid.
            xlrd.XLRDError: If the OLE workbook cannot be read.
        """
        if data.startswith(OLE_MAGIC):
            sheets = self._extract_xls(data)
        else:
            sheets = self._extract_xlsx(data)
        return "\n\n".join(sheet for sheet in sheets if sheet)

    def _extract_xlsx(self, data: bytes) -> list[str]:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        try:
            return [
                _render_sheet(sheet.title, sheet.iter_rows(values_only=True))
                for sheet in workbook.worksheets
            ]
        finally:
            workbook.close()

    def _extract_xls(self, data: bytes) -> list[str]:
        frames: dict[str, pd.DataFrame] = pd.read_excel(
            io.BytesIO(data), sheet_name=None, header=None, engine="xlrd"
        )
        return [
            _render_sheet(str(name), frame.itertuples(index=False, name=None))
            for name, frame in frames.items()
        ]
