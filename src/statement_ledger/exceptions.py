"""Exceptions raised inside the package.

None of these escape the public parse entry points; the orchestrator turns
each of them into an entry of ``ParseResult.errors``.
"""


class StatementLedgerError(Exception):
    """Base class for package errors."""


class UnsupportedFileTypeError(StatementLedgerError):
    """Raised when a file suffix has no content-extraction route."""

    def __init__(self, suffix: str):
        self.suffix = suffix
        super().__init__(
            f"Unsupported file type: {suffix or '(none)'}. "
            "Please upload a CSV, PDF, or XLSX file."
        )


class ContentExtractionError(StatementLedgerError):
    """Raised when the document or spreadsheet reader fails.

    The reader's own exception is kept as ``__cause__``.
    """

    def __init__(self, label: str, detail: str):
        self.label = label
        self.detail = detail
        super().__init__(f"{label}: {detail}")
