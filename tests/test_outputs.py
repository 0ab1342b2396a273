"""Tests for ledger CSV serialization."""

from decimal import Decimal

import pytest

from statement_ledger.models import ExportFormat, Transaction
from statement_ledger.outputs import format_amount, format_date, to_ledger_csv, write_ledger_csv


def txn(amount, payee="Shop", memo="", date="2024-02-01"):
    return Transaction(
        date=date,
        original_date="01/02/2024",
        payee=payee,
        memo=memo,
        amount=Decimal(amount),
    )


class TestFormatting:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            ("100.00", "100"),
            ("1.50", "1.5"),
            ("1.05", "1.05"),
            ("0.11", "0.11"),
            ("10.10", "10.1"),
            ("152250", "152250"),
            ("-42.5", "42.5"),
            ("1.005", "1.01"),
        ],
    )
    def test_format_amount(self, amount, expected):
        assert format_amount(Decimal(amount)) == expected

    def test_format_date(self):
        assert format_date("2024-02-01") == "01/02/2024"
        assert format_date("01/02/2024") == "01/02/2024"


class TestInflowOutflow:
    def test_inflow_row_has_literal_zero_outflow(self):
        csv_text = to_ledger_csv([txn("42.5", payee="Acme, Inc")], ExportFormat.INFLOW_OUTFLOW)
        assert csv_text.splitlines() == [
            '"Date","Payee","Memo","Outflow","Inflow"',
            '"01/02/2024","Acme, Inc","","0","42.5"',
        ]

    def test_outflow_row(self):
        line = to_ledger_csv([txn("-15.00", payee="Coffee Shop")]).splitlines()[1]
        assert line == '"01/02/2024","Coffee Shop","","15","0"'

    def test_quotes_are_doubled(self):
        line = to_ledger_csv([txn("-1", payee='Say "hi"', memo="(1 USD = 3.6725 AED)")]).splitlines()[1]
        assert line == '"01/02/2024","Say ""hi""","(1 USD = 3.6725 AED)","1","0"'

    def test_empty_input_is_header_only(self):
        assert to_ledger_csv([]) == '"Date","Payee","Memo","Outflow","Inflow"\n'

    def test_rows_keep_input_order(self):
        rows = to_ledger_csv(
            [txn("1", date="2024-03-01"), txn("2", date="2024-01-01")]
        ).splitlines()[1:]
        assert [row.split(",")[0] for row in rows] == ['"01/03/2024"', '"01/01/2024"']


class TestSignedAmount:
    def test_amount_column_carries_sign(self):
        lines = to_ledger_csv([txn("-15.00"), txn("2500.10")], ExportFormat.AMOUNT).splitlines()
        assert lines == [
            '"Date","Payee","Memo","Amount"',
            '"01/02/2024","Shop","","-15"',
            '"01/02/2024","Shop","","2500.1"',
        ]

    def test_format_accepts_plain_string(self):
        assert to_ledger_csv([], "amount").startswith('"Date","Payee","Memo","Amount"')


def test_write_ledger_csv_is_utf8_without_bom(tmp_path):
    path = tmp_path / "out" / "ledger.csv"
    write_ledger_csv([txn("-9.99", payee="Café")], path)

    data = path.read_bytes()
    assert not data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8").splitlines()[1] == '"01/02/2024","Café","","9.99","0"'
