"""Bank-specific detectors and parsers."""

from .base import StatementParser
from .detector import (
    CSV_PARSERS,
    PDF_PARSERS,
    SHEET_PARSERS,
    detect_csv_variant,
    detect_document_variant,
)

__all__ = [
    "StatementParser",
    "CSV_PARSERS",
    "PDF_PARSERS",
    "SHEET_PARSERS",
    "detect_csv_variant",
    "detect_document_variant",
]
