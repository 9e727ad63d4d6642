"""Generated NACHA file record and its transmission lifecycle."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from clearhouse.core.exceptions import InvalidStatusTransition
from clearhouse.core.types import FileStatus, FileType

# generated -> transmitted | failed; failed -> transmitted | failed (retry)
_ALLOWED: dict[FileStatus, set[FileStatus]] = {
    FileStatus.GENERATED: {FileStatus.TRANSMITTED, FileStatus.FAILED},
    FileStatus.FAILED: {FileStatus.TRANSMITTED, FileStatus.FAILED},
    FileStatus.TRANSMITTED: set(),
}


class NACHAFile(BaseModel):
    """Metadata for one generation call.

    Immutable apart from ``status``/``transmitted``/``transmitted_at``, which
    only the transmission collaborator changes through ``mark_*``.
    """

    id: str
    filename: str
    file_type: FileType
    content: str  # fixed-width text, or a FILE: envelope when encrypted
    effective_date: date
    transaction_count: int
    total_amount: Decimal = Decimal("0")
    total_debits: Decimal = Decimal("0")
    total_credits: Decimal = Decimal("0")
    status: FileStatus = FileStatus.GENERATED
    generated_at: datetime
    transmitted_at: datetime | None = None
    file_path: str = ""
    transaction_ids: list[str] = Field(default_factory=list)
    transmitted: bool = False
    encrypted: bool = False

    def _move(self, target: FileStatus) -> None:
        if target not in _ALLOWED[self.status]:
            raise InvalidStatusTransition(self.status.value, target.value)
        self.status = target

    def mark_transmitted(self, at: datetime | None = None) -> None:
        self._move(FileStatus.TRANSMITTED)
        self.transmitted = True
        self.transmitted_at = at or datetime.now()

    def mark_failed(self) -> None:
        self._move(FileStatus.FAILED)
        self.transmitted = False


class GeneratedFile(BaseModel):
    """Result of ``NACHAEncoder.generate``: the metadata plus the plain text."""

    nacha_file: NACHAFile
    content: str
    entry_count: int
    entry_hash: str
