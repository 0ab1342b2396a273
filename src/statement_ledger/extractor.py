"""Main extraction orchestrator.

Routes a file by suffix to the matching content reader, detects the
statement variant and runs its parser. Every public entry point returns a
``ParseResult``; unsupported input, undetected statements and reader
failures all come back as ``errors``.
"""

from collections.abc import Sequence
from pathlib import Path

from .banks import (
    CSV_PARSERS,
    PDF_PARSERS,
    SHEET_PARSERS,
    detect_csv_variant,
    detect_document_variant,
)
from .exceptions import ContentExtractionError, UnsupportedFileTypeError
from .layout import PositionedFragment, reconstruct_pages
from .logging_setup import get_logger
from .models import ParseResult, Variant
from .sources import (
    CellValue,
    PdfReader,
    SheetReader,
    read_pdf_fragments,
    read_spreadsheet_rows,
    rows_to_lines,
)

logger = get_logger(__name__)

ROUTES = {
    ".csv": "csv",
    ".pdf": "pdf",
    ".xlsx": "sheet",
    ".xls": "sheet",
}

CSV_UNDETECTED = (
    "Could not detect CSV statement type. "
    "Currently supports ADCB account and credit card statements."
)
PDF_UNDETECTED = (
    "Could not detect PDF statement type. "
    "Currently supports Emirates NBD credit card and account statements."
)
SHEET_UNDETECTED = (
    "Could not detect spreadsheet statement type. "
    "Currently supports Emirates NBD credit card statements."
)


def route_for(filename: str) -> str:
    """Return the content route (``csv``, ``pdf`` or ``sheet``) for a file name.

    Raises:
        UnsupportedFileTypeError: If the suffix is not supported
    """
    suffix = Path(filename).suffix.lower()
    route = ROUTES.get(suffix)
    if route is None:
        raise UnsupportedFileTypeError(suffix)
    return route


def parse_csv_text(content: str) -> ParseResult:
    """Parse delimited statement text."""
    variant = detect_csv_variant(content)
    logger.debug("CSV detection: %s", variant)
    if variant is None:
        logger.warning("Unrecognized CSV statement")
        return ParseResult.unknown(CSV_UNDETECTED)
    return CSV_PARSERS[variant]().parse([content])


def parse_pdf_pages(pages: Sequence[Sequence[PositionedFragment]]) -> ParseResult:
    """Parse a PDF given the positioned fragments of each page."""
    texts = reconstruct_pages(pages)
    variant = detect_document_variant(texts[0]) if texts else None
    logger.debug("PDF detection: %s", variant)
    if variant is None:
        logger.warning("Unrecognized PDF statement")
        return ParseResult.unknown(PDF_UNDETECTED)
    return PDF_PARSERS[variant]().parse(texts)


def parse_spreadsheet_rows(rows: Sequence[Sequence[CellValue]]) -> ParseResult:
    """Parse spreadsheet rows as read from the first worksheet."""
    text = "\n".join(rows_to_lines(rows))
    variant = detect_document_variant(text)
    logger.debug("Spreadsheet detection: %s", variant)
    parser_class = SHEET_PARSERS.get(variant) if variant is not None else None
    if parser_class is None:
        logger.warning("Unrecognized spreadsheet statement")
        return ParseResult.unknown(SHEET_UNDETECTED)
    return parser_class().parse([text])


def _read(reader, data: bytes, label: str):
    try:
        return reader(data)
    except Exception as e:
        raise ContentExtractionError(label, str(e)) from e


def parse_bytes(
    filename: str,
    data: bytes,
    *,
    pdf_reader: PdfReader = read_pdf_fragments,
    sheet_reader: SheetReader = read_spreadsheet_rows,
) -> ParseResult:
    """Parse one statement file from its name and raw bytes.

    Args:
        filename: Used only for its suffix
        data: Raw file content
        pdf_reader: Service returning positioned fragments per PDF page
        sheet_reader: Service returning the rows of a spreadsheet

    Returns:
        ParseResult; never raises for bad or unsupported input
    """
    try:
        route = route_for(filename)
        if route == "csv":
            result = parse_csv_text(data.decode("utf-8-sig", errors="replace"))
        elif route == "pdf":
            result = parse_pdf_pages(_read(pdf_reader, data, "PDF parsing error"))
        else:
            result = parse_spreadsheet_rows(
                _read(sheet_reader, data, "Spreadsheet parsing error")
            )
    except UnsupportedFileTypeError as e:
        logger.warning("Skipping %s: %s", filename, e)
        return ParseResult.unknown(str(e))
    except ContentExtractionError as e:
        logger.error("Could not read %s", filename, exc_info=e.__cause__)
        return ParseResult.unknown(str(e))

    logger.info(
        "Parsed %s as %s %s: %d transactions, %d errors",
        filename,
        result.bank_name,
        result.statement_type,
        len(result.transactions),
        len(result.errors),
    )
    return result


def parse_file(
    path: Path | str,
    *,
    pdf_reader: PdfReader = read_pdf_fragments,
    sheet_reader: SheetReader = read_spreadsheet_rows,
) -> ParseResult:
    """Parse a statement file on disk.

    An unsupported suffix is reported without opening the file.

    Raises:
        FileNotFoundError: If a supported file does not exist
        OSError: If the file exists but cannot be read
    """
    path = Path(path)
    try:
        route_for(path.name)
    except UnsupportedFileTypeError as e:
        logger.warning("Skipping %s: %s", path.name, e)
        return ParseResult.unknown(str(e))

    if not path.exists():
        raise FileNotFoundError(f"Statement file not found: {path}")

    return parse_bytes(
        path.name, path.read_bytes(), pdf_reader=pdf_reader, sheet_reader=sheet_reader
    )


def detect_bytes(
    filename: str,
    data: bytes,
    *,
    pdf_reader: PdfReader = read_pdf_fragments,
    sheet_reader: SheetReader = read_spreadsheet_rows,
) -> Variant | None:
    """Detect the statement variant without extracting transactions.

    Raises:
        UnsupportedFileTypeError: If the suffix is not supported
        ContentExtractionError: If the reader fails
    """
    route = route_for(filename)
    if route == "csv":
        return detect_csv_variant(data.decode("utf-8-sig", errors="replace"))
    if route == "pdf":
        texts = reconstruct_pages(_read(pdf_reader, data, "PDF parsing error"))
        return detect_document_variant(texts[0]) if texts else None
    rows = _read(sheet_reader, data, "Spreadsheet parsing error")
    variant = detect_document_variant("\n".join(rows_to_lines(rows)))
    return variant if variant in SHEET_PARSERS else None
