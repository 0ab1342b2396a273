"""Statement detection and the variant -> parser lookup tables."""

from ..models import Variant
from .adcb import AdcbAccountParser, AdcbCreditCardParser, detect_adcb_type
from .base import StatementParser
from .enbd import (
    EnbdAccountParser,
    EnbdCreditCardParser,
    EnbdCreditCardSheetParser,
    detect_enbd_type,
)

# One table per container type. A new variant means a new enum member and a
# new entry here.
CSV_PARSERS: dict[Variant, type[StatementParser]] = {
    Variant.ADCB_ACCOUNT: AdcbAccountParser,
    Variant.ADCB_CREDIT_CARD: AdcbCreditCardParser,
}

PDF_PARSERS: dict[Variant, type[StatementParser]] = {
    Variant.ENBD_ACCOUNT: EnbdAccountParser,
    Variant.ENBD_CREDIT_CARD: EnbdCreditCardParser,
}

SHEET_PARSERS: dict[Variant, type[StatementParser]] = {
    Variant.ENBD_CREDIT_CARD: EnbdCreditCardSheetParser,
}


def detect_csv_variant(content: str) -> Variant | None:
    """Detect the variant of delimited-text content.

    Args:
        content: Full CSV text

    Returns:
        The variant, or None if the content is not recognized
    """
    return detect_adcb_type(content)


def detect_document_variant(text: str) -> Variant | None:
    """Detect the variant of document text (first page) or flattened sheet rows."""
    return detect_enbd_type(text)
