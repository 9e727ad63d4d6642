"""Clearhouse exception hierarchy."""

from __future__ import annotations

from datetime import date


class ClearhouseError(Exception):
    """Base exception for all Clearhouse errors."""


class ConfigurationError(ClearhouseError):
    """Required configuration is missing or unusable."""


class InvalidEntryError(ClearhouseError):
    """A payable entry cannot be rendered into a NACHA record."""


class NoEligibleTransactionsError(ClearhouseError):
    """Nothing is left to encode after effective-date filtering."""

    def __init__(self, effective_date: date, file_type: str) -> None:
        self.effective_date = effective_date
        self.file_type = file_type
        super().__init__(
            f"No pending {file_type} entries found for effective date {effective_date.isoformat()}"
        )


class InvalidStatusTransition(ClearhouseError):
    """A NACHA file status change not allowed by the file lifecycle."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move NACHA file from {current!r} to {target!r}")


class EnvelopeError(ClearhouseError):
    """Base for at-rest encryption failures."""


class EncryptionError(EnvelopeError):
    """Raised when encryption fails."""


class DecryptionError(EnvelopeError):
    """Raised when an envelope cannot be opened (malformed, wrong key, corrupted)."""


class IntegrityError(EnvelopeError):
    """Decrypted content does not match the checksum stored alongside it."""


class HolidayStoreError(ClearhouseError):
    """Holiday provider lookup failed."""


class CacheError(ClearhouseError):
    """Redis cache operation failed."""


class FileStoreError(ClearhouseError):
    """File storage operation failed."""
