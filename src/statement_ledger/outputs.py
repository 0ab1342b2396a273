"""Ledger CSV output for budgeting tools.

Every field, header included, is double-quoted with inner quotes doubled.
Dates are written ``DD/MM/YYYY``. In the inflow/outflow layout the unused
side of a row is the literal ``0``, never blank.
"""

import csv
import io
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from .models import ExportFormat, Transaction

INFLOW_OUTFLOW_HEADER = ["Date", "Payee", "Memo", "Outflow", "Inflow"]
AMOUNT_HEADER = ["Date", "Payee", "Memo", "Amount"]


def format_date(iso_date: str) -> str:
    """``YYYY-MM-DD`` -> ``DD/MM/YYYY``; anything else is returned as is."""
    parts = iso_date.split("-")
    if len(parts) != 3:
        return iso_date
    year, month, day = parts
    return f"{day}/{month}/{year}"


def format_amount(amount: Decimal) -> str:
    """Absolute value to two decimals, with trailing fractional zeros removed.

    ``100.00`` -> ``"100"``, ``1.50`` -> ``"1.5"``, ``0.11`` -> ``"0.11"``.
    """
    fixed = f"{abs(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"
    if "." in fixed:
        fixed = fixed.rstrip("0").rstrip(".")
    return fixed or "0"


def _rows(transactions: Iterable[Transaction], fmt: ExportFormat) -> Iterable[list[str]]:
    if fmt == ExportFormat.INFLOW_OUTFLOW:
        yield INFLOW_OUTFLOW_HEADER
        for txn in transactions:
            outflow = format_amount(txn.amount) if txn.amount < 0 else "0"
            inflow = format_amount(txn.amount) if txn.amount > 0 else "0"
            yield [format_date(txn.date), txn.payee, txn.memo, outflow, inflow]
    else:
        yield AMOUNT_HEADER
        for txn in transactions:
            sign = "-" if txn.amount < 0 else ""
            yield [format_date(txn.date), txn.payee, txn.memo, sign + format_amount(txn.amount)]


def to_ledger_csv(
    transactions: Iterable[Transaction],
    fmt: ExportFormat = ExportFormat.INFLOW_OUTFLOW,
) -> str:
    """Serialize transactions as a budgeting-tool CSV document.

    Args:
        transactions: Transactions in the order they should appear
        fmt: Output layout

    Returns:
        CSV text with ``\\n`` line endings
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(_rows(transactions, ExportFormat(fmt)))
    return buffer.getvalue()


def write_ledger_csv(
    transactions: Iterable[Transaction],
    output_path: Path,
    fmt: ExportFormat = ExportFormat.INFLOW_OUTFLOW,
) -> None:
    """Write the ledger CSV to ``output_path`` as UTF-8 without a BOM."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        f.write(to_ledger_csv(transactions, fmt))
