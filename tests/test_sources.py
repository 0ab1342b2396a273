"""Tests for the spreadsheet readers."""

from datetime import datetime
from decimal import Decimal

import pytest
import xlrd
from xlrd.sheet import Cell

from statement_ledger import sources
from statement_ledger.extractor import parse_bytes
from statement_ledger.sources import (
    LEGACY_WORKBOOK_SIGNATURE,
    is_legacy_workbook,
    read_spreadsheet_rows,
)

LEGACY_BYTES = LEGACY_WORKBOOK_SIGNATURE + b"\x00" * 504


class FakeSheet:
    def __init__(self, rows):
        self.rows = rows
        self.nrows = len(rows)

    def row(self, i):
        return self.rows[i]


class FakeBook:
    datemode = 0

    def __init__(self, rows):
        self.sheet = FakeSheet(rows)
        self.released = False

    def sheet_by_index(self, index):
        assert index == 0
        return self.sheet

    def release_resources(self):
        self.released = True


CARD_ROWS = [
    [
        Cell(xlrd.XL_CELL_TEXT, "Transaction Date"),
        Cell(xlrd.XL_CELL_TEXT, "Posting Date"),
        Cell(xlrd.XL_CELL_TEXT, "Description"),
        Cell(xlrd.XL_CELL_TEXT, "Amount"),
    ],
    [
        Cell(xlrd.XL_CELL_DATE, 45293.0),
        Cell(xlrd.XL_CELL_DATE, 45294.0),
        Cell(xlrd.XL_CELL_TEXT, "CARREFOUR"),
        Cell(xlrd.XL_CELL_NUMBER, 100.0),
    ],
    [
        Cell(xlrd.XL_CELL_DATE, 45295.0),
        Cell(xlrd.XL_CELL_EMPTY, ""),
        Cell(xlrd.XL_CELL_TEXT, "REFUND"),
        Cell(xlrd.XL_CELL_TEXT, "12.50CR"),
    ],
]


@pytest.fixture
def legacy_book(monkeypatch):
    book = FakeBook(CARD_ROWS)
    calls = []

    def open_workbook(file_contents, on_demand):
        calls.append(file_contents)
        return book

    monkeypatch.setattr(sources.xlrd, "open_workbook", open_workbook)
    book.calls = calls
    return book


class TestLegacyWorkbooks:
    def test_signature_detection(self):
        assert is_legacy_workbook(LEGACY_BYTES)
        assert not is_legacy_workbook(b"PK\x03\x04rest-of-zip")
        assert not is_legacy_workbook(b"")

    def test_legacy_bytes_are_read_with_xlrd(self, legacy_book):
        rows = read_spreadsheet_rows(LEGACY_BYTES)

        assert legacy_book.calls == [LEGACY_BYTES]
        assert legacy_book.released
        assert rows[1] == [datetime(2024, 1, 2), datetime(2024, 1, 3), "CARREFOUR", 100]
        assert rows[2] == [datetime(2024, 1, 4), None, "REFUND", "12.50CR"]

    def test_xls_statement_parses_end_to_end(self, legacy_book):
        result = parse_bytes("card.xls", LEGACY_BYTES)

        assert result.errors == []
        assert result.bank_name == "Emirates NBD"
        assert [(t.date, t.payee, t.amount) for t in result.transactions] == [
            ("2024-01-02", "CARREFOUR", Decimal("-100")),
            ("2024-01-04", "REFUND", Decimal("12.50")),
        ]

    def test_book_is_released_on_failure(self, monkeypatch):
        book = FakeBook([])

        def broken_sheet(index):
            raise xlrd.XLRDError("No sheet")

        book.sheet_by_index = broken_sheet
        monkeypatch.setattr(sources.xlrd, "open_workbook", lambda **kwargs: book)

        with pytest.raises(xlrd.XLRDError):
            read_spreadsheet_rows(LEGACY_BYTES)
        assert book.released
