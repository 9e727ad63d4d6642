"""Closed vocabularies used across Clearhouse."""

from __future__ import annotations

from enum import StrEnum


class FileType(StrEnum):
    DEBIT = "DR"
    CREDIT = "CR"


class AccountType(StrEnum):
    CHECKING = "checking"
    SAVINGS = "savings"


class FileStatus(StrEnum):
    GENERATED = "generated"
    TRANSMITTED = "transmitted"
    FAILED = "failed"
