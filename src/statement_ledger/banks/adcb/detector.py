"""Statement type detection for ADCB CSV exports."""

from ...config import get_settings
from ...models import Variant
from ...tokenizer import split_lines

# A header set maps to exactly one variant; the sets share no keyword
HEADER_SETS: dict[Variant, tuple[str, ...]] = {
    Variant.ADCB_ACCOUNT: ("Posting Date", "Value Date", "Debit Amount"),
    Variant.ADCB_CREDIT_CARD: ("Transaction Date", "Cr/Dr", "Amount in AED"),
}


def detect_adcb_type(content: str, scan_lines: int | None = None) -> Variant | None:
    """Classify ADCB CSV content as an account or credit card statement.

    Tried in order:
    1. "Account Number:" on the first non-blank line (account statements only)
    2. "Statement Period" on the first line together with a "Credit Limit"
       label anywhere in the content (credit card statements)
    3. A known column header set within the first ``scan_lines`` lines

    Returns:
        The detected variant, or None if nothing matched
    """
    if scan_lines is None:
        scan_lines = get_settings().header_scan_lines

    lines = split_lines(content)
    if not lines:
        return None

    head = lines[:scan_lines]
    first = lines[0]

    if "Account Number:" in first:
        return Variant.ADCB_ACCOUNT

    if "Statement Period" in first and any("Credit Limit" in line for line in lines):
        return Variant.ADCB_CREDIT_CARD

    for line in head:
        for variant, keywords in HEADER_SETS.items():
            if all(keyword in line for keyword in keywords):
                return variant

    return None
