"""Emirates NBD PDF and spreadsheet statements."""

from .detector import detect_enbd_type
from .parsers import EnbdAccountParser, EnbdCreditCardParser, EnbdCreditCardSheetParser

__all__ = [
    "detect_enbd_type",
    "EnbdAccountParser",
    "EnbdCreditCardParser",
    "EnbdCreditCardSheetParser",
]
