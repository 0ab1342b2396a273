"""Content readers: PDF words via pdfplumber, spreadsheet rows via openpyxl or xlrd.

These are the only blocking calls in a parse. The orchestrator receives them
as plain callables so that callers (and tests) can swap in their own.
"""

import io
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime

import pdfplumber
import xlrd
from openpyxl import load_workbook

from .layout import PositionedFragment

CellValue = str | int | float | date | datetime | None

PdfReader = Callable[[bytes], list[list[PositionedFragment]]]
SheetReader = Callable[[bytes], list[list[CellValue]]]


def read_pdf_fragments(data: bytes) -> list[list[PositionedFragment]]:
    """Read positioned words from every page of a PDF.

    pdfplumber measures ``top``/``bottom`` from the top edge of the page; they
    are flipped here so that ``y`` grows upward from the page's bottom edge,
    which is what the line clustering expects.
    """
    pages: list[list[PositionedFragment]] = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            words = page.extract_words(keep_blank_chars=True) or []
            pages.append(
                [
                    PositionedFragment.from_raw(
                        w["x0"], float(page.height) - float(w["bottom"]), w["text"]
                    )
                    for w in words
                ]
            )
    return pages


# Compound-document signature of legacy BIFF workbooks (.xls)
LEGACY_WORKBOOK_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def is_legacy_workbook(data: bytes) -> bool:
    return data.startswith(LEGACY_WORKBOOK_SIGNATURE)


def read_spreadsheet_rows(data: bytes) -> list[list[CellValue]]:
    """Read all rows of the first worksheet as cell values.

    Legacy ``.xls`` workbooks are read with xlrd, everything else with
    openpyxl. The format is picked from the content, not the file name.
    """
    if is_legacy_workbook(data):
        return read_legacy_rows(data)

    workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _legacy_cell(cell, datemode: int) -> CellValue:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    # xlrd stores every number as a float
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    return cell.value


def read_legacy_rows(data: bytes) -> list[list[CellValue]]:
    """Read the first worksheet of a legacy ``.xls`` workbook."""
    book = xlrd.open_workbook(file_contents=data, on_demand=True)
    try:
        sheet = book.sheet_by_index(0)
        return [
            [_legacy_cell(cell, book.datemode) for cell in sheet.row(i)]
            for i in range(sheet.nrows)
        ]
    finally:
        book.release_resources()


def format_cell(value: CellValue) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%d/%m/%Y")
    return str(value).strip()


def rows_to_lines(rows: Iterable[Sequence[CellValue]]) -> list[str]:
    """Flatten spreadsheet rows into quoted comma-delimited lines.

    Fully empty rows are dropped.
    """
    lines = []
    for row in rows:
        cells = [format_cell(value) for value in row]
        if not any(cells):
            continue
        lines.append(",".join('"' + cell.replace('"', '""') + '"' for cell in cells))
    return lines
