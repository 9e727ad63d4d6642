"""NACHA file assembly: record ordering, control totals, block padding."""

from __future__ import annotations

import datetime as dt
import logging
import math
import threading
import uuid
from decimal import Decimal
from typing import Callable, Sequence

from clearhouse.calendar.business_days import BusinessDayCalendar
from clearhouse.calendar.effective_dates import EffectiveDatePolicy
from clearhouse.core.config import ACHConfig
from clearhouse.core.exceptions import NoEligibleTransactionsError
from clearhouse.core.types import FileType
from clearhouse.models.nacha_file import GeneratedFile, NACHAFile
from clearhouse.models.payable import PayableEntry
from clearhouse.nacha import records
from clearhouse.nacha.fields import BLOCKING_FACTOR, PADDING_RECORD, to_cents
from clearhouse.security.envelope import SecureEnvelope

logger = logging.getLogger(__name__)

MAX_FILE_SEQUENCE = 9
BATCH_NUMBER = 1


class NACHAEncoder:
    """Builds single-batch NACHA files from ``PayableEntry`` lists.

    Holds the file-sequence counter (1-9, cycling) used for the file ID
    modifier. ``generate`` reads and advances it inside one lock, so an
    encoder may be shared between threads.
    """

    def __init__(
        self,
        config: ACHConfig,
        *,
        policy: EffectiveDatePolicy | None = None,
        envelope: SecureEnvelope | None = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
        path_prefix: str = "nacha/",
    ) -> None:
        self._config = config
        self._path_prefix = path_prefix
        self._policy = policy or EffectiveDatePolicy(BusinessDayCalendar())
        self._envelope = envelope
        self._clock = clock
        self._sequence = 1
        self._lock = threading.Lock()

    @property
    def file_sequence_number(self) -> int:
        return self._sequence

    def _advance_sequence(self) -> int:
        current = self._sequence
        self._sequence = current % MAX_FILE_SEQUENCE + 1
        return current

    # ---- content ----

    def build_content(
        self,
        entries: Sequence[PayableEntry],
        effective_date: dt.date,
        file_type: FileType,
        *,
        created_at: dt.datetime | None = None,
        file_id_modifier: int = 1,
    ) -> str:
        """Render the record lines, padded to whole blocks and newline-joined."""
        created_at = created_at or self._clock()
        service_class = records.service_class_code(entries)
        hash_field = records.entry_hash([entry.routing_number for entry in entries])
        debit_cents = sum(to_cents(e.amount) for e in entries if e.entry_type == FileType.DEBIT)
        credit_cents = sum(to_cents(e.amount) for e in entries if e.entry_type == FileType.CREDIT)

        lines = [
            records.file_header(self._config, created_at, file_id_modifier),
            records.batch_header(self._config, service_class, effective_date, file_type, BATCH_NUMBER),
        ]
        for sequence, entry in enumerate(entries, start=1):
            trace = records.trace_number(self._config.originating_dfi, sequence)
            lines.append(records.entry_detail(entry, trace))
        lines.append(
            records.batch_control(
                self._config, service_class, len(entries), hash_field,
                debit_cents, credit_cents, BATCH_NUMBER,
            )
        )
        block_count = math.ceil((len(lines) + 1) / BLOCKING_FACTOR)
        lines.append(
            records.file_control(1, block_count, len(entries), hash_field, debit_cents, credit_cents)
        )

        while len(lines) % BLOCKING_FACTOR:
            lines.append(PADDING_RECORD)
        return "\n".join(lines)

    # ---- generation ----

    def generate(
        self,
        entries: Sequence[PayableEntry],
        effective_date: dt.date,
        file_type: FileType,
        *,
        encrypt: bool | None = None,
    ) -> GeneratedFile:
        """Encode ``entries`` into a file effective on a verified business day.

        ``encrypt`` defaults to whether an envelope was configured; asking for
        encryption without one raises ``ValueError``.
        """
        file_type = FileType(file_type)
        target_date = self._policy.ach_effective_date(effective_date)
        if not entries:
            raise NoEligibleTransactionsError(target_date, file_type.value)
        if target_date != effective_date:
            logger.info("Effective date %s is not a business day, using %s", effective_date, target_date)

        if encrypt is None:
            encrypt = self._envelope is not None
        if encrypt and self._envelope is None:
            raise ValueError("Encryption requested but no envelope is configured")

        with self._lock:
            created_at = self._clock()
            modifier = self._advance_sequence()
            content = self.build_content(
                entries, target_date, file_type, created_at=created_at, file_id_modifier=modifier
            )

        transaction_ids = list(dict.fromkeys(entry.transaction_id for entry in entries))
        stored = (
            self._envelope.encrypt_nacha_file(content, transaction_ids, target_date)
            if encrypt else content
        )
        filename = self.filename(target_date, file_type, created_at)
        total_debits = sum((e.amount for e in entries if e.entry_type == FileType.DEBIT), Decimal("0"))
        total_credits = sum((e.amount for e in entries if e.entry_type == FileType.CREDIT), Decimal("0"))

        nacha_file = NACHAFile(
            id=f"nacha_{uuid.uuid4().hex}",
            filename=filename,
            file_type=file_type,
            content=stored,
            effective_date=target_date,
            transaction_count=len(entries),
            total_amount=total_debits + total_credits,
            total_debits=total_debits,
            total_credits=total_credits,
            generated_at=created_at,
            file_path=f"{self._path_prefix}{filename}",
            transaction_ids=transaction_ids,
            encrypted=encrypt,
        )
        logger.info(
            "Generated %s (%d entries, debits=%s, credits=%s, encrypted=%s)",
            filename, len(entries), total_debits, total_credits, encrypt,
        )
        return GeneratedFile(
            nacha_file=nacha_file,
            content=content,
            entry_count=len(entries),
            entry_hash=records.entry_hash([entry.routing_number for entry in entries]),
        )

    def generate_for_date(
        self,
        entries: Sequence[PayableEntry],
        effective_date: dt.date,
        file_type: FileType,
        *,
        encrypt: bool | None = None,
    ) -> GeneratedFile:
        """Keep entries whose own date normalizes to the requested one, then generate.

        An entry dated on a weekend or holiday settles on the next business
        day, so it is picked up by a request for either date.
        """
        target_date = self._policy.ach_effective_date(effective_date)
        eligible = [
            entry for entry in entries
            if self._policy.ach_effective_date(entry.effective_date) == target_date
        ]
        if not eligible:
            raise NoEligibleTransactionsError(target_date, FileType(file_type).value)
        return self.generate(eligible, target_date, file_type, encrypt=encrypt)

    @staticmethod
    def filename(effective_date: dt.date, file_type: FileType, created_at: dt.datetime) -> str:
        return f"ACH_{FileType(file_type).value}_{effective_date:%Y%m%d}_{created_at:%H%M%S%f}.txt"
