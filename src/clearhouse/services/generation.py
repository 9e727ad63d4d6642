"""NACHAGenerationService: release-date driven generation and storage."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from clearhouse.calendar.effective_dates import EffectiveDatePolicy
from clearhouse.core.protocols import IFileStore
from clearhouse.core.types import FileType
from clearhouse.models.nacha_file import GeneratedFile
from clearhouse.models.payable import PayableEntry
from clearhouse.nacha.encoder import NACHAEncoder
from clearhouse.services.holiday_service import HolidayService

logger = logging.getLogger(__name__)


class NACHAGenerationService:
    """Ties the calendar, encoder and optional file store together.

    The engine pieces stay pure; this is the layer that refreshes holidays and
    hands the stored form of each file to the file store.
    """

    def __init__(
        self,
        encoder: NACHAEncoder,
        policy: EffectiveDatePolicy,
        *,
        holidays: HolidayService | None = None,
        file_store: IFileStore | None = None,
    ) -> None:
        self._encoder = encoder
        self._policy = policy
        self._holidays = holidays
        self._file_store = file_store

    def _refresh(self) -> None:
        if self._holidays is not None:
            self._holidays.refresh_if_needed()

    def generate(
        self, entries: Sequence[PayableEntry], file_type: FileType, effective_date: dt.date
    ) -> GeneratedFile:
        """Generate for a debit effective date; credit files shift by the settlement offset."""
        self._refresh()
        target = self._policy.ach_effective_date(effective_date)
        if FileType(file_type) == FileType.CREDIT:
            target = self._policy.credit_effective_date(target)
        return self._finish(entries, file_type, target)

    def generate_daily(
        self, entries: Sequence[PayableEntry], file_type: FileType, release_date: dt.date
    ) -> GeneratedFile:
        """Generate the file released on ``release_date``."""
        self._refresh()
        target = self._policy.target_effective_date(release_date, FileType(file_type))
        logger.info("Daily %s release on %s targets effective date %s", file_type, release_date, target)
        return self._finish(entries, file_type, target)

    def _finish(
        self, entries: Sequence[PayableEntry], file_type: FileType, target: dt.date
    ) -> GeneratedFile:
        matching = [entry for entry in entries if entry.entry_type == FileType(file_type)]
        generated = self._encoder.generate_for_date(matching, target, file_type)
        if self._file_store is not None:
            nacha_file = generated.nacha_file
            self._file_store.write(
                nacha_file.file_path, nacha_file.content.encode("utf-8"), content_type="text/plain"
            )
        return generated
