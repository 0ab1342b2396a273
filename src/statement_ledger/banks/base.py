"""Abstract base classes for statement parsers."""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal

from ..logging_setup import get_logger
from ..models import ParseResult, Transaction, Variant
from ..normalize import clean_description

logger = get_logger(__name__)


def capture_metadata(
    lines: Sequence[str],
    patterns: Mapping[str, re.Pattern],
    metadata: dict[str, str],
) -> None:
    """Fill ``metadata`` from the first match of each labelled pattern.

    Group 1 of each pattern is the value; trailing commas and whitespace left
    over from delimited text are dropped. Missing labels are not an error.
    """
    for line in lines:
        for key, pattern in patterns.items():
            if key in metadata:
                continue
            match = pattern.search(line)
            if match:
                value = re.sub(r"[\s,]+$", "", match.group(1).strip())
                if value:
                    metadata[key] = value


def build_transaction(
    original_date: str,
    date: str,
    payee: str,
    amount: Decimal,
    memo: str = "",
) -> Transaction | None:
    """Create a transaction, or ``None`` for a zero amount."""
    if amount == 0:
        return None
    return Transaction(
        date=date,
        original_date=original_date,
        payee=payee,
        memo=clean_description(memo),
        amount=amount,
    )


class StatementParser(ABC):
    """Base class for one (institution, statement type) parser.

    ``parse`` never raises: an unexpected failure inside ``extract`` becomes a
    single ``"Parsing error: ..."`` entry and whatever was collected so far is
    discarded.
    """

    variant: Variant

    @property
    def bank_name(self) -> str:
        return self.variant.institution.value

    @property
    def statement_type(self) -> str:
        return self.variant.statement_type.value

    def parse(self, pages: Sequence[str]) -> ParseResult:
        """Parse statement text.

        Args:
            pages: Text of each page; delimited text is a single page

        Returns:
            ParseResult for this parser's variant
        """
        result = ParseResult.for_variant(self.variant)
        try:
            self.extract(pages, result)
        except Exception as e:
            logger.exception("%s failed", self.__class__.__name__)
            result.transactions = []
            result.errors.append(f"Parsing error: {e}")
        logger.debug(
            "%s extracted %d transactions",
            self.__class__.__name__,
            len(result.transactions),
        )
        return result

    @abstractmethod
    def extract(self, pages: Sequence[str], result: ParseResult) -> None:
        """Fill ``result`` with metadata, transactions and errors."""
        pass


@dataclass(frozen=True)
class RowMatch:
    """A dated row accepted by a row pattern, sign already resolved."""

    original_date: str
    date: str
    description: str
    amount: Decimal


RowMatcher = Callable[[str], RowMatch | None]


class DocumentStatementParser(StatementParser):
    """Parser for reconstructed PDF text with a primary and a fallback pass.

    Both passes scan the same lines and share the continuation rules; the
    fallback only runs when the primary pattern found nothing at all.
    """

    # Detail lines starting with one of these become the memo, not payee text
    memo_prefixes: tuple[str, ...] = ()

    @abstractmethod
    def match_primary(self, line: str) -> RowMatch | None:
        pass

    @abstractmethod
    def match_fallback(self, line: str) -> RowMatch | None:
        pass

    @abstractmethod
    def starts_row(self, line: str) -> bool:
        """Whether ``line`` begins with a transaction date."""
        pass

    @abstractmethod
    def ends_continuation(self, line: str) -> bool:
        """Whether ``line`` is a footer or boilerplate line."""
        pass

    def clean_payee(self, description: str) -> str:
        return clean_description(description)

    def extract_transactions(self, pages: Sequence[str]) -> list[Transaction]:
        transactions = self.scan(pages, self.match_primary)
        if not transactions:
            logger.debug("%s: primary pattern found nothing, trying fallback", self.__class__.__name__)
            transactions = self.scan(pages, self.match_fallback)
        return transactions

    def scan(self, pages: Sequence[str], matcher: RowMatcher) -> list[Transaction]:
        transactions: list[Transaction] = []
        for page_text in pages:
            lines = page_text.split("\n")
            for i, line in enumerate(lines):
                row = matcher(line.strip())
                if row is None:
                    continue

                details, memo = self.collect_continuation(lines, i + 1)
                description = " ".join([row.description, *details])
                txn = build_transaction(
                    original_date=row.original_date,
                    date=row.date,
                    payee=self.clean_payee(description),
                    amount=row.amount,
                    memo=memo,
                )
                if txn is not None:
                    transactions.append(txn)
        return transactions

    def collect_continuation(self, lines: Sequence[str], start: int) -> tuple[list[str], str]:
        """Gather the undated detail lines that follow a row.

        Stops at a blank line, the next dated row, or a footer line. Continuation
        never crosses a page boundary.
        """
        details: list[str] = []
        memo = ""
        for line in lines[start:]:
            text = line.strip()
            if not text or self.starts_row(text):
                break
            if not memo and text.startswith(self.memo_prefixes):
                memo = text
                continue
            if self.ends_continuation(text):
                break
            details.append(text)
        return details, memo
