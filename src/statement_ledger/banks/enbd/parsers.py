"""Parsers for Emirates NBD statements.

PDF statements arrive as reconstructed page text (see ``layout``); the credit
card spreadsheet export arrives as flattened, quoted CSV lines.
"""

import re
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from ...models import ParseResult, Variant
from ...normalize import (
    clean_enbd_description,
    is_numeric_date,
    normalize_month_date,
    normalize_numeric_date,
    parse_amount,
)
from ...tokenizer import split_delimited_line, split_lines
from ..base import (
    DocumentStatementParser,
    RowMatch,
    StatementParser,
    build_transaction,
    capture_metadata,
)
from .detector import is_credit_card_sheet_header

NUMERIC_DATE_START_RE = re.compile(r"^(\d{2}/\d{2}/\d{4})")
MONTH_DATE_START_RE = re.compile(
    r"^\s*(\d{1,2}\s+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{4})\s+",
    re.IGNORECASE,
)

# Transaction date, posting date, description, amount with optional CR flag
CARD_ROW_RE = re.compile(
    r"^(\d{2}/\d{2}/\d{4})\s+(\d{2}/\d{2}/\d{4})\s+(.+?)\s+([\d,]+\.\d{2})(CR)?\s*$"
)
CARD_TRAILING_AMOUNT_RE = re.compile(r"([\d,]+\.\d{2})(CR)?\s*$")
CARD_SKIP_DESCRIPTIONS = ("Transaction Date", "Posting Date", "Previous Statement")
CARD_BOILERPLATE_RE = re.compile(
    r"^(?:Transaction Date|Posting Date|Previous Statement|Total\b|Card Number|Minimum Payment"
    r"|Payment Due|Statement Period|Credit Card Statement|Page \d+\b|\d+\s*/\s*\d+$)"
    r"|electronically generated"
)
CARD_METADATA = {
    "card_number": re.compile(r"Card Number[:\s]*([\dX* ]+)"),
    "period": re.compile(r"Statement Period[:\s]*(.+)$"),
}
FX_MEMO_PREFIXES = ("(1 AED =", "(1 USD =")

# Signed amounts; debits are printed negative, credits positive
ACCOUNT_AMOUNT_RE = re.compile(r"-?[\d,]+\.\d{2}")
ACCOUNT_BALANCE_RE = re.compile(r"([\d,]+\.\d{2})\s*(?:Cr|Dr)\s*$", re.IGNORECASE)
ACCOUNT_FOOTER_RE = re.compile(
    r"STATEMENT OF ACCOUNT|electronically generated|Need help|Emirates NBD"
    r"|^This is an|^\d+\s*/\s*\d+$"
)
ACCOUNT_METADATA = {
    "account_number": re.compile(r"Account No\.\s*(\d+)"),
    "iban": re.compile(r"IBAN\s*(AE\d+)"),
    "currency": re.compile(r"Currency\s+(AED|USD|EUR|GBP)"),
}
ACCOUNT_PERIOD_RE = re.compile(
    r"STATEMENT OF ACCOUNT FOR THE PERIOD OF\s+(.+?)\s+to\s+(.+?)\s*$", re.IGNORECASE
)

SHEET_AMOUNT_RE = re.compile(r"^(-?[\d,]+(?:\.\d+)?)\s*(CR|DR)?$", re.IGNORECASE)


def _card_amount(amount_str: str, credit_flag: str | None) -> Decimal:
    amount = parse_amount(amount_str)
    return amount if credit_flag == "CR" else -amount


class EnbdCreditCardParser(DocumentStatementParser):
    """Emirates NBD credit card PDF statement.

    Rows look like ``DD/MM/YYYY DD/MM/YYYY Description 1,234.56[CR]``; the
    first date is the transaction date. A following ``(1 USD = ...)`` line
    carries the exchange rate and becomes the memo.
    """

    variant = Variant.ENBD_CREDIT_CARD
    memo_prefixes = FX_MEMO_PREFIXES

    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        capture_metadata(split_lines("\n".join(pages)), CARD_METADATA, result.metadata)
        result.transactions.extend(self.extract_transactions(pages))

    def starts_row(self, line: str) -> bool:
        return NUMERIC_DATE_START_RE.match(line) is not None

    def ends_continuation(self, line: str) -> bool:
        return (
            CARD_TRAILING_AMOUNT_RE.search(line) is not None
            or CARD_BOILERPLATE_RE.search(line) is not None
        )

    def clean_payee(self, description: str) -> str:
        return clean_enbd_description(description)

    def match_primary(self, line: str) -> RowMatch | None:
        match = CARD_ROW_RE.match(line)
        if not match:
            return None

        trans_date, _posting_date, description, amount_str, credit_flag = match.groups()
        if any(label in description for label in CARD_SKIP_DESCRIPTIONS):
            return None

        try:
            amount = _card_amount(amount_str, credit_flag)
        except InvalidOperation:
            return None

        return RowMatch(
            original_date=trans_date,
            date=normalize_numeric_date(trans_date),
            description=description,
            amount=amount,
        )

    def match_fallback(self, line: str) -> RowMatch | None:
        """Single leading date plus a trailing amount.

        Catches rows whose posting date column wrapped away from the line.
        """
        date_match = NUMERIC_DATE_START_RE.match(line)
        if not date_match:
            return None
        amount_match = CARD_TRAILING_AMOUNT_RE.search(line)
        if not amount_match:
            return None

        date_str = date_match.group(1)
        rest = line[date_match.end() :].strip()
        second_date = re.match(r"^\d{2}/\d{2}/\d{4}\s+", rest)
        if second_date:
            rest = rest[second_date.end() :]
        description = CARD_TRAILING_AMOUNT_RE.sub("", rest).strip()

        if not description or any(label in description for label in CARD_SKIP_DESCRIPTIONS[:2]):
            return None

        try:
            amount = _card_amount(amount_match.group(1), amount_match.group(2))
        except InvalidOperation:
            return None

        return RowMatch(
            original_date=date_str,
            date=normalize_numeric_date(date_str),
            description=description,
            amount=amount,
        )


class EnbdAccountParser(DocumentStatementParser):
    """Emirates NBD account PDF statement.

    Columns: Date | Description | Debits | Credits | Balance [Cr/Dr]. Debits
    are printed negative. Description text wraps onto undated lines below the
    row.
    """

    variant = Variant.ENBD_ACCOUNT

    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        lines = split_lines("\n".join(pages))
        capture_metadata(lines, ACCOUNT_METADATA, result.metadata)
        for line in lines:
            match = ACCOUNT_PERIOD_RE.search(line)
            if match:
                result.metadata["period"] = f"{match.group(1).strip()} to {match.group(2).strip()}"
                break

        result.transactions.extend(self.extract_transactions(pages))

    def starts_row(self, line: str) -> bool:
        return (
            MONTH_DATE_START_RE.match(line) is not None
            or NUMERIC_DATE_START_RE.match(line) is not None
        )

    def ends_continuation(self, line: str) -> bool:
        return ACCOUNT_FOOTER_RE.search(line) is not None

    def clean_payee(self, description: str) -> str:
        return clean_enbd_description(description)

    def match_primary(self, line: str) -> RowMatch | None:
        match = MONTH_DATE_START_RE.match(line)
        if not match:
            return None
        date_str = match.group(1).strip()
        return self._row_from_rest(date_str, normalize_month_date(date_str), line[match.end() :])

    def match_fallback(self, line: str) -> RowMatch | None:
        """Same columns, but dated ``DD/MM/YYYY``."""
        match = NUMERIC_DATE_START_RE.match(line)
        if not match or not line[match.end() :].startswith((" ", "\t")):
            return None
        date_str = match.group(1)
        return self._row_from_rest(date_str, normalize_numeric_date(date_str), line[match.end() :])

    def _row_from_rest(self, original_date: str, date: str, rest: str) -> RowMatch | None:
        amounts = list(ACCOUNT_AMOUNT_RE.finditer(rest))
        if not amounts:
            return None

        description = rest[: amounts[0].start()].strip()
        if not description or description == "Description" or "Date" in description:
            return None

        # A lone Cr/Dr-suffixed figure is an opening or closing balance
        if len(amounts) == 1 and ACCOUNT_BALANCE_RE.search(rest):
            return None

        # With several figures the first is the transaction and the last the
        # running balance. This is positional guesswork, not a column parse.
        try:
            amount = parse_amount(amounts[0].group())
        except InvalidOperation:
            return None

        return RowMatch(
            original_date=original_date,
            date=date,
            description=description,
            amount=amount,
        )


def _labelled_value(fields: list[str], label: str) -> str | None:
    for i, field in enumerate(fields):
        if not field.startswith(label):
            continue
        inline = field[len(label) :].lstrip(" :").strip()
        if inline:
            return inline
        for value in fields[i + 1 :]:
            if value:
                return value
    return None


class EnbdCreditCardSheetParser(StatementParser):
    """Emirates NBD credit card spreadsheet export.

    Column positions come from the header row. The sign comes from a Cr/Dr
    column when there is one, otherwise from a ``CR`` suffix on the amount.
    """

    variant = Variant.ENBD_CREDIT_CARD

    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        lines = split_lines("\n".join(pages))

        header_index = None
        header: list[str] = []
        for i, line in enumerate(lines):
            fields = split_delimited_line(line)
            if is_credit_card_sheet_header(fields):
                header_index, header = i, fields
                break
            for key, label in (("card_number", "Card Number"), ("period", "Statement Period")):
                value = _labelled_value(fields, label)
                if value and key not in result.metadata:
                    result.metadata[key] = value

        if header_index is None:
            result.errors.append(
                "Could not find header row in Emirates NBD credit card spreadsheet"
            )
            return

        date_col = next(i for i, name in enumerate(header) if name.startswith("Transaction Date"))
        desc_col = next(i for i, name in enumerate(header) if name.startswith("Description"))
        amount_col = next(i for i, name in enumerate(header) if name.startswith("Amount"))
        flag_col = next(
            (i for i, name in enumerate(header) if name.lower() in ("cr/dr", "dr/cr")), None
        )
        width = max(date_col, desc_col, amount_col, flag_col or 0) + 1

        for line in lines[header_index + 1 :]:
            fields = split_delimited_line(line)
            if len(fields) < width:
                continue

            date_str = fields[date_col]
            description = fields[desc_col]
            if not is_numeric_date(date_str):
                continue
            if any(label in description for label in CARD_SKIP_DESCRIPTIONS):
                continue

            amount_match = SHEET_AMOUNT_RE.match(fields[amount_col])
            if not amount_match:
                continue

            credit_flag = (amount_match.group(2) or "").upper()
            if flag_col is not None:
                credit_flag = fields[flag_col].strip().upper()

            try:
                amount = _card_amount(amount_match.group(1), credit_flag)
            except InvalidOperation:
                continue

            txn = build_transaction(
                original_date=date_str,
                date=normalize_numeric_date(date_str),
                payee=clean_enbd_description(description),
                amount=amount,
            )
            if txn is not None:
                result.transactions.append(txn)
