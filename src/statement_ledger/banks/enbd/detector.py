"""Statement type detection for Emirates NBD documents and spreadsheets."""

from ...config import get_settings
from ...models import Variant
from ...tokenizer import split_delimited_line, split_lines

CREDIT_CARD_MARKERS = ("Credit Card Statement", "كشف حساب بطاقة")
ACCOUNT_MARKERS = ("Account Statement", "STATEMENT OF ACCOUNT")

# Column headers of the credit card spreadsheet export
CREDIT_CARD_SHEET_HEADER = ("Transaction Date", "Posting Date", "Description", "Amount")


def _marker_variant(text: str) -> Variant | None:
    if any(marker in text for marker in CREDIT_CARD_MARKERS):
        return Variant.ENBD_CREDIT_CARD
    if any(marker in text for marker in ACCOUNT_MARKERS):
        return Variant.ENBD_ACCOUNT
    return None


def is_credit_card_sheet_header(fields: list[str]) -> bool:
    names = [field.strip() for field in fields]
    return all(
        any(name.startswith(keyword) for name in names)
        for keyword in CREDIT_CARD_SHEET_HEADER
    )


def detect_enbd_type(text: str, scan_lines: int | None = None) -> Variant | None:
    """Classify Emirates NBD text (usually the first page) by statement type.

    Tried in order: a marker phrase on the first non-blank line, a marker
    phrase anywhere in ``text``, then the spreadsheet column header set in
    the first ``scan_lines`` lines.
    """
    if scan_lines is None:
        scan_lines = get_settings().header_scan_lines

    lines = split_lines(text)
    if not lines:
        return None

    variant = _marker_variant(lines[0]) or _marker_variant(text)
    if variant is not None:
        return variant

    for line in lines[:scan_lines]:
        if is_credit_card_sheet_header(split_delimited_line(line)):
            return Variant.ENBD_CREDIT_CARD

    return None
