"""Renderers for the five NACHA record types (1, 5, 6, 8, 9).

Field widths per record (total 94 each):
    1 File header    1+2+10+10+6+4+1+3+2+1+23+23+8
    5 Batch header   1+3+16+20+10+3+10+6+6+3+1+8+7
    6 Entry detail   1+2+8+1+17+10+15+22+2+1+15
    8 Batch control  1+3+6+10+12+12+10+19+6+8+7
    9 File control   1+6+6+8+10+12+12+39
"""

from __future__ import annotations

import datetime as dt
from typing import Sequence

from clearhouse.core.config import ACHConfig
from clearhouse.core.types import AccountType, FileType
from clearhouse.models.payable import PayableEntry
from clearhouse.nacha.fields import alpha, hhmm, numeric, record, right, to_cents, yymmdd

ENTRY_HASH_MODULUS = 10_000_000_000

SERVICE_CLASS_MIXED = "200"
SERVICE_CLASS_CREDITS = "220"
SERVICE_CLASS_DEBITS = "225"

_TRANSACTION_CODES = {
    (FileType.DEBIT, AccountType.CHECKING): "27",
    (FileType.DEBIT, AccountType.SAVINGS): "37",
    (FileType.CREDIT, AccountType.CHECKING): "22",
    (FileType.CREDIT, AccountType.SAVINGS): "32",
}


def transaction_code(entry: PayableEntry) -> str:
    return _TRANSACTION_CODES[(entry.entry_type, entry.account_type)]


def service_class_code(entries: Sequence[PayableEntry]) -> str:
    kinds = {entry.entry_type for entry in entries}
    if kinds == {FileType.DEBIT}:
        return SERVICE_CLASS_DEBITS
    if kinds == {FileType.CREDIT}:
        return SERVICE_CLASS_CREDITS
    return SERVICE_CLASS_MIXED


def entry_hash(routing_numbers: Sequence[str]) -> str:
    """Sum of the first eight routing digits, modulo 10^10, as 10 digits."""
    total = sum(int(routing[:8]) for routing in routing_numbers)
    return numeric(total % ENTRY_HASH_MODULUS, 10)


def trace_number(originating_dfi: str, sequence: int) -> str:
    return alpha(originating_dfi[:8], 8) + numeric(sequence, 7)


def file_header(config: ACHConfig, created_at: dt.datetime, file_id_modifier: int) -> str:
    return record(
        "1",
        "01",  # priority code
        right(config.immediate_destination, 10),
        right(config.immediate_origin, 10),
        yymmdd(created_at.date()),
        hhmm(created_at),
        alpha(str(file_id_modifier), 1),
        "094",  # record size
        "10",  # blocking factor
        "1",  # format code
        alpha(config.immediate_destination_name or config.company_name, 23),
        alpha(config.immediate_origin_name or config.company_name, 23),
        alpha("", 8),  # reference code
    )


def batch_header(
    config: ACHConfig,
    service_class: str,
    effective_date: dt.date,
    file_type: FileType,
    batch_number: int = 1,
) -> str:
    return record(
        "5",
        service_class,
        alpha(config.company_name, 16),
        alpha(config.discretionary_data, 20),
        alpha(config.company_id, 10),
        alpha(config.standard_entry_class, 3),
        alpha(f"{file_type.value} PAYMENT", 10),
        alpha("", 6),  # company descriptive date
        yymmdd(effective_date),
        alpha("", 3),  # settlement date, filled by the ACH operator
        "1",  # originator status code
        alpha(config.originating_dfi[:8], 8),
        numeric(batch_number, 7),
    )


def entry_detail(entry: PayableEntry, trace: str) -> str:
    return record(
        "6",
        transaction_code(entry),
        entry.receiving_dfi,
        entry.check_digit,
        alpha(entry.account_number, 17),
        numeric(to_cents(entry.amount), 10),
        alpha(entry.individual_id, 15),
        alpha(entry.individual_name, 22),
        alpha("", 2),  # discretionary data
        "0",  # addenda record indicator
        trace,
    )


def batch_control(
    config: ACHConfig,
    service_class: str,
    entry_count: int,
    hash_field: str,
    debit_cents: int,
    credit_cents: int,
    batch_number: int = 1,
) -> str:
    return record(
        "8",
        service_class,
        numeric(entry_count, 6),
        hash_field,
        numeric(debit_cents, 12),
        numeric(credit_cents, 12),
        alpha(config.company_id, 10),
        alpha("", 19),  # message authentication code
        alpha("", 6),  # reserved
        alpha(config.originating_dfi[:8], 8),
        numeric(batch_number, 7),
    )


def file_control(
    batch_count: int,
    block_count: int,
    entry_count: int,
    hash_field: str,
    debit_cents: int,
    credit_cents: int,
) -> str:
    return record(
        "9",
        numeric(batch_count, 6),
        numeric(block_count, 6),
        numeric(entry_count, 8),
        hash_field,
        numeric(debit_cents, 12),
        numeric(credit_cents, 12),
        alpha("", 39),  # reserved
    )
