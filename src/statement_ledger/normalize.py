"""Shared date, amount and description normalization."""

import re
from decimal import Decimal

NUMERIC_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
MONTH_DATE_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})$")

MONTHS = {
    "jan": "01",
    "feb": "02",
    "mar": "03",
    "apr": "04",
    "may": "05",
    "jun": "06",
    "jul": "07",
    "aug": "08",
    "sep": "09",
    "oct": "10",
    "nov": "11",
    "dec": "12",
}

# Fixed literal corrections applied to Emirates NBD descriptions
ENBD_CORRECTIONS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"\bARE\s*$"), ""),
    (re.compile(r"\bABUDHABI\b", re.IGNORECASE), "ABU DHABI"),
)


def is_numeric_date(value: str) -> bool:
    return NUMERIC_DATE_RE.match(value) is not None


def normalize_numeric_date(value: str) -> str:
    """Convert ``DD/MM/YYYY`` to ``YYYY-MM-DD``.

    Anything that is not strictly zero-padded ``DD/MM/YYYY`` comes back
    unchanged.
    """
    match = NUMERIC_DATE_RE.match(value.strip())
    if not match:
        return value
    day, month, year = match.groups()
    return f"{year}-{month}-{day}"


def normalize_month_date(value: str) -> str:
    """Convert ``D Mon YYYY`` (e.g. ``4 Jan 2026``) to ``YYYY-MM-DD``.

    The month abbreviation is case-insensitive. Unrecognized input comes back
    unchanged.
    """
    match = MONTH_DATE_RE.match(value.strip())
    if not match:
        return value
    day, month_name, year = match.groups()
    month = MONTHS.get(month_name.lower())
    if month is None:
        return value
    return f"{year}-{month}-{day.zfill(2)}"


def parse_amount(value: str) -> Decimal:
    """Parse an amount string, dropping thousands separators.

    Empty strings and ``"0"`` give ``Decimal(0)``.

    Raises:
        decimal.InvalidOperation: If the text is not a number
    """
    cleaned = value.replace(",", "").strip()
    if not cleaned or cleaned == "0":
        return Decimal(0)
    return Decimal(cleaned)


def clean_description(value: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not value:
        return ""
    return re.sub(r"\s+", " ", value).strip()


def clean_enbd_description(value: str | None) -> str:
    cleaned = clean_description(value)
    for pattern, replacement in ENBD_CORRECTIONS:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned.strip()
