"""Payable entries: the normalized shape the NACHA encoder renders.

Two input shapes reach the encoder: combined transactions carrying both a
debit side and a credit side, and pre-split entries carrying a single side.
Both are turned into ``PayableEntry`` by the adapters at the bottom of this
module, so record rendering has exactly one code path.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Iterable, Optional

from pydantic import BaseModel, Field, field_validator

from clearhouse.core.types import AccountType, FileType

CENT = Decimal("0.01")


class TransactionStatus(StrEnum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"
    CANCELLED = "cancelled"


def _to_money(value: object) -> Decimal:
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if amount < 0:
        raise ValueError("amount must not be negative")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _check_routing(value: str) -> str:
    if len(value) != 9 or not (value.isascii() and value.isdigit()):
        raise ValueError(f"routing number must be exactly 9 ASCII digits, got {value!r}")
    return value


class PayableEntry(BaseModel):
    """One side of a transfer, ready to become an entry detail record."""

    transaction_id: str
    entry_type: FileType
    routing_number: str
    account_number: str = Field(max_length=17)
    individual_id: str = Field(default="", max_length=15)
    individual_name: str = Field(default="", max_length=22)
    account_type: AccountType = AccountType.CHECKING
    amount: Decimal
    effective_date: date

    model_config = {"str_strip_whitespace": True, "frozen": True}

    @field_validator("routing_number")
    @classmethod
    def _valid_routing(cls, value: str) -> str:
        return _check_routing(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _valid_amount(cls, value: object) -> Decimal:
        return _to_money(value)

    @property
    def receiving_dfi(self) -> str:
        """First eight routing digits (the part summed into the entry hash)."""
        return self.routing_number[:8]

    @property
    def check_digit(self) -> str:
        return self.routing_number[8]


class ACHTransaction(BaseModel):
    """Combined transaction with separate debit-side and credit-side accounts.

    The ``dr_*``/``cr_*`` fields win when present; the generic fields are the
    fallback and, with ``transaction_type``, describe a single-sided legacy row.
    """

    id: str
    transaction_type: FileType = FileType.DEBIT
    account_type: AccountType = AccountType.CHECKING
    amount: Decimal
    effective_date: date
    status: TransactionStatus = TransactionStatus.PENDING

    routing_number: str = ""
    account_number: str = ""
    individual_id: str = ""
    individual_name: str = ""

    dr_routing_number: Optional[str] = None
    dr_account_number: Optional[str] = None
    dr_id: Optional[str] = None
    dr_name: Optional[str] = None
    cr_routing_number: Optional[str] = None
    cr_account_number: Optional[str] = None
    cr_id: Optional[str] = None
    cr_name: Optional[str] = None

    model_config = {"str_strip_whitespace": True}

    def side(self, file_type: FileType) -> PayableEntry:
        """Project one side of the transaction into a ``PayableEntry``."""
        prefix = "dr" if file_type == FileType.DEBIT else "cr"
        return PayableEntry(
            transaction_id=self.id,
            entry_type=file_type,
            routing_number=getattr(self, f"{prefix}_routing_number") or self.routing_number,
            account_number=getattr(self, f"{prefix}_account_number") or self.account_number,
            individual_id=getattr(self, f"{prefix}_id") or self.individual_id,
            individual_name=getattr(self, f"{prefix}_name") or self.individual_name,
            account_type=self.account_type,
            amount=self.amount,
            effective_date=self.effective_date,
        )


class TransactionEntry(BaseModel):
    """Pre-split entry: one side of a transaction group."""

    id: str
    parent_transaction_id: str = ""
    entry_type: FileType
    routing_number: str
    account_number: str
    account_id: str = ""
    account_name: str = ""
    account_type: AccountType = AccountType.CHECKING
    amount: Decimal
    effective_date: date
    status: TransactionStatus = TransactionStatus.PENDING

    model_config = {"str_strip_whitespace": True}

    def to_payable(self) -> PayableEntry:
        return PayableEntry(
            transaction_id=self.id,
            entry_type=self.entry_type,
            routing_number=self.routing_number,
            account_number=self.account_number,
            individual_id=self.account_id,
            individual_name=self.account_name,
            account_type=self.account_type,
            amount=self.amount,
            effective_date=self.effective_date,
        )


# ---------------------------------------------------------------------------
# Boundary adapters
# ---------------------------------------------------------------------------

def entries_from_transactions(
    transactions: Iterable[ACHTransaction], file_type: FileType | None = None
) -> list[PayableEntry]:
    """Normalize combined transactions.

    With ``file_type`` every transaction contributes its debit or credit side.
    Without it each transaction contributes the side named by its own
    ``transaction_type``, which is how mixed debit/credit lists are built.
    """
    return [tx.side(file_type or tx.transaction_type) for tx in transactions]


def entries_from_split(
    entries: Iterable[TransactionEntry], file_type: FileType
) -> list[PayableEntry]:
    """Normalize pre-split entries, keeping only those of ``file_type``."""
    return [entry.to_payable() for entry in entries if entry.entry_type == file_type]
