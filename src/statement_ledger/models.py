"""Pydantic models for normalized statement data."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Institution(str, Enum):
    ADCB = "ADCB"
    ENBD = "Emirates NBD"


class StatementType(str, Enum):
    ACCOUNT = "Account Statement"
    CREDIT_CARD = "Credit Card Statement"


class Variant(str, Enum):
    """A supported (institution, statement type) combination."""

    ADCB_ACCOUNT = "adcb-account"
    ADCB_CREDIT_CARD = "adcb-creditcard"
    ENBD_ACCOUNT = "enbd-account"
    ENBD_CREDIT_CARD = "enbd-creditcard"

    @property
    def institution(self) -> Institution:
        if self in (Variant.ADCB_ACCOUNT, Variant.ADCB_CREDIT_CARD):
            return Institution.ADCB
        return Institution.ENBD

    @property
    def statement_type(self) -> StatementType:
        if self in (Variant.ADCB_ACCOUNT, Variant.ENBD_ACCOUNT):
            return StatementType.ACCOUNT
        return StatementType.CREDIT_CARD


class ExportFormat(str, Enum):
    INFLOW_OUTFLOW = "inflow-outflow"
    AMOUNT = "amount"


class Transaction(BaseModel):
    """A single ledger entry.

    ``amount`` is signed: negative for money leaving the account, positive
    for money coming in.
    """

    model_config = ConfigDict(frozen=True)

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    original_date: str
    payee: str
    memo: str = ""
    amount: Decimal

    @field_validator("amount")
    @classmethod
    def _non_zero(cls, value: Decimal) -> Decimal:
        if value == 0:
            raise ValueError("zero-amount transactions are never materialized")
        return value

    @property
    def is_inflow(self) -> bool:
        return self.amount > 0


class ParseResult(BaseModel):
    """The outcome of parsing one input file."""

    bank_name: str = "Unknown"
    statement_type: str = "Unknown"
    transactions: list[Transaction] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def unknown(cls, error: str) -> "ParseResult":
        return cls(errors=[error])

    @classmethod
    def for_variant(cls, variant: Variant) -> "ParseResult":
        return cls(
            bank_name=variant.institution.value,
            statement_type=variant.statement_type.value,
        )

    @property
    def inflows(self) -> list[Transaction]:
        return [t for t in self.transactions if t.amount > 0]

    @property
    def outflows(self) -> list[Transaction]:
        return [t for t in self.transactions if t.amount < 0]

    def summary(self) -> dict:
        return {
            "bank_name": self.bank_name,
            "statement_type": self.statement_type,
            "total_transactions": len(self.transactions),
            "inflows": len(self.inflows),
            "outflows": len(self.outflows),
            "total_inflow": str(sum((t.amount for t in self.inflows), Decimal(0))),
            "total_outflow": str(sum((-t.amount for t in self.outflows), Decimal(0))),
            "errors": len(self.errors),
        }
