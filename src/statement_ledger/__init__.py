"""Bank statement parsing and budgeting ledger export."""

from .extractor import parse_bytes, parse_file
from .models import ExportFormat, ParseResult, Transaction, Variant
from .outputs import to_ledger_csv

__version__ = "0.1.0"

__all__ = [
    "ExportFormat",
    "ParseResult",
    "Transaction",
    "Variant",
    "parse_bytes",
    "parse_file",
    "to_ledger_csv",
]
