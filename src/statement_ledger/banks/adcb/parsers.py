"""Parsers for ADCB CSV statements."""

import re
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from ...models import ParseResult, Variant
from ...normalize import (
    clean_description,
    is_numeric_date,
    normalize_numeric_date,
    parse_amount,
)
from ...tokenizer import split_delimited_line, split_lines
from ..base import StatementParser, build_transaction, capture_metadata

ACCOUNT_METADATA = {
    "account_number": re.compile(r"Account Number:\s*([^\"]+)"),
    "period": re.compile(r"Statement Period:\s*([^\"]+)"),
    "account_name": re.compile(r"Account Name\(s\):\s*([^\"]+)"),
}

CREDIT_CARD_METADATA = {
    "period": re.compile(r"Statement Period\s*:\s*([^\"]+)"),
    "balance": re.compile(r"Current Balance:\s*([^\"]+)"),
    "credit_limit": re.compile(r"(?<!Available )Credit Limit:\s*([^\"]+)"),
}

# Card-level rows printed inside the transaction table
CARD_INFO_ROWS = ("Primary Card Number", "Card Holder Name")


def _find_header(lines: Sequence[str], is_header) -> int | None:
    for i, line in enumerate(lines):
        if is_header(line, split_delimited_line(line)):
            return i
    return None


class AdcbAccountParser(StatementParser):
    """ADCB current/savings account CSV.

    Columns after the header: Posting Date, Value Date, Reference,
    Description, Debit, Credit.
    """

    variant = Variant.ADCB_ACCOUNT

    @staticmethod
    def is_header(line: str, fields: list[str]) -> bool:
        return (
            line.startswith("Posting Date")
            or "Posting Date,Value Date" in line
            or (fields[0] == "Posting Date" and "Value Date" in fields)
        )

    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        lines = split_lines("\n".join(pages))

        header_index = _find_header(lines, self.is_header)
        capture_metadata(
            lines[:header_index] if header_index is not None else lines,
            ACCOUNT_METADATA,
            result.metadata,
        )

        if header_index is None:
            result.errors.append("Could not find header row in ADCB account statement")
            return

        for line in lines[header_index + 1 :]:
            fields = split_delimited_line(line)
            if len(fields) < 6:
                continue

            posting_date, _value_date, _reference, description, debit_str, credit_str = fields[:6]
            if not is_numeric_date(posting_date):
                continue

            try:
                debit = parse_amount(debit_str)
                credit = parse_amount(credit_str)
            except InvalidOperation:
                continue

            amount: Decimal = credit if credit > 0 else -debit
            txn = build_transaction(
                original_date=posting_date,
                date=normalize_numeric_date(posting_date),
                payee=clean_description(description),
                amount=amount,
            )
            if txn is not None:
                result.transactions.append(txn)


class AdcbCreditCardParser(StatementParser):
    """ADCB credit card CSV.

    Columns after the header: Transaction Date, Description, Cr/Dr, Amount.
    """

    variant = Variant.ADCB_CREDIT_CARD

    @staticmethod
    def is_header(line: str, fields: list[str]) -> bool:
        return "Transaction Date" in line and "Cr/Dr" in line

    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        lines = split_lines("\n".join(pages))

        header_index = _find_header(lines, self.is_header)
        capture_metadata(
            lines[:header_index] if header_index is not None else lines,
            CREDIT_CARD_METADATA,
            result.metadata,
        )

        if header_index is None:
            result.errors.append("Could not find header row in ADCB credit card statement")
            return

        for line in lines[header_index + 1 :]:
            fields = split_delimited_line(line)
            if len(fields) < 4:
                continue

            date_str, description, cr_dr, amount_str = fields[:4]
            if any(label in description for label in CARD_INFO_ROWS):
                continue
            if not is_numeric_date(date_str):
                continue

            try:
                raw_amount = parse_amount(amount_str)
            except InvalidOperation:
                continue

            amount = raw_amount if cr_dr.strip().upper() == "CR" else -raw_amount
            txn = build_transaction(
                original_date=date_str,
                date=normalize_numeric_date(date_str),
                payee=clean_description(description),
                amount=amount,
            )
            if txn is not None:
                result.transactions.append(txn)
