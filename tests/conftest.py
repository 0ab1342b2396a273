"""Shared fixtures for statement-ledger tests.

Statement samples are inline text so the tests need no binary fixtures. PDF
input is simulated with positioned fragments built from text lines, and the
reader services are replaced with fakes.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from statement_ledger.config import get_settings
from statement_ledger.layout import PositionedFragment


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached settings so env overrides in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def page_from_lines(lines: list[str], top: int = 800, step: int = 12) -> list[PositionedFragment]:
    """Lay out text lines as fragments, one row per line.

    Columns within a line are separated by two or more spaces and get
    increasing x positions. Rows are ``step`` units apart, well outside the
    clustering tolerance.
    """
    fragments = []
    for row, line in enumerate(lines):
        y = top - row * step
        x = 40.0
        for chunk in line.split("  "):
            chunk = chunk.strip()
            if chunk:
                fragments.append(PositionedFragment(x=x, y=y, text=chunk))
                x += 10 + 6 * len(chunk)
    return fragments


@pytest.fixture
def make_page() -> Callable[..., list[PositionedFragment]]:
    return page_from_lines


ADCB_ACCOUNT_CSV = """Account Number: 123456789,,
Account Name(s): JOHN DOE,,
Statement Period: 01/01/2024 to 31/01/2024,,

Posting Date,Value Date,Reference Number,Description,Debit Amount,Credit Amount
01/02/2024,01/02/2024,R1,"Coffee Shop",15.00,0
03/02/2024,03/02/2024,R2,"SALARY   TRANSFER","0","12,500.00"
04/02/2024,04/02/2024,R3,"Zero row",0,0
Closing balance,,,,,
05/02/2024,05/02/2024,R4,"Card ""Plus"" fee",1.50,
"""

ADCB_CARD_CSV = """Statement Period : 01/01/2024 - 31/01/2024
Current Balance: AED 1,234.00
Available Credit Limit: AED 8,766.00
Credit Limit: AED 10,000.00
Transaction Date,Description,Cr/Dr,Amount in AED
,Primary Card Number 4111XXXXXXXX1111,,
,Card Holder Name JOHN DOE,,
02/01/2024,"NOON.COM   DUBAI",DR,"1,099.00"
05/01/2024,PAYMENT RECEIVED,CR,500.00
06/01/2024,REVERSAL,DR,0.00
"""

ENBD_CARD_LINES = [
    "Credit Card Statement",
    "Card Number: 4033 XXXX XXXX 7337",
    "Statement Period: 01/01/2026 to 31/01/2026",
    "Transaction Date  Posting Date  Description  Amount (AED)",
    "01/01/2026  01/01/2026  Previous Statement Balance  1,000.00",
    "02/01/2026  03/01/2026  CARREFOUR ABUDHABI ARE  250.75",
    "04/01/2026  05/01/2026  AMAZON WEB SERVICES  36.72",
    "(1 USD = 3.6725 AED)",
    "10/01/2026  10/01/2026  PAYMENT THANK YOU  1,000.00CR",
    "15/01/2026  16/01/2026  APPLE.COM/BILL  3.99",
    "ITUNES.COM IRL",
    "Total  1,291.46",
]

ENBD_ACCOUNT_LINES = [
    "STATEMENT OF ACCOUNT FOR THE PERIOD OF 01 Jan 2026 to 31 Jan 2026",
    "Account No. 1015551234501",
    "IBAN AE070260001015551234501",
    "Currency AED",
    "Date  Description  Debits  Credits  Balance",
    "01 Jan 2026  OPENING BALANCE  44,905.30 Cr",
    "24 Jan 2026  CC NO.-4033********7337 RMA REF NO.-  -38,564.24  6,341.06 Cr",
    "EBID2F82568DA9 4",
    "24 Jan 2026  IPP 20260124ADC6B98110847600515  2,939.21  9,280.27 Cr",
    "602774815 AED 2939 .21 ALESSANDRO",
    "SAPPIA OWN ACCOUNT TRANSFERTO ENBD",
    "1 / 3",
]


@pytest.fixture
def adcb_account_csv() -> str:
    return ADCB_ACCOUNT_CSV


@pytest.fixture
def adcb_card_csv() -> str:
    return ADCB_CARD_CSV


@pytest.fixture
def enbd_card_lines() -> list[str]:
    return list(ENBD_CARD_LINES)


@pytest.fixture
def enbd_account_lines() -> list[str]:
    return list(ENBD_ACCOUNT_LINES)
