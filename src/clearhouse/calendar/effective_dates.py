"""ACH effective-date rules built on the business-day policy."""

from __future__ import annotations

import datetime as dt

from clearhouse.calendar.business_days import BusinessDayCalendar, DateLike, as_date
from clearhouse.core.types import FileType

CREDIT_SETTLEMENT_OFFSET = 2  # credits settle two business days after the paired debit
RELEASE_LEAD_DAYS = 1  # a file released today is effective one business day later


class EffectiveDatePolicy:
    """Maps caller dates onto valid ACH effective dates."""

    def __init__(self, calendar: BusinessDayCalendar) -> None:
        self._calendar = calendar

    @property
    def calendar(self) -> BusinessDayCalendar:
        return self._calendar

    def ach_effective_date(self, day: DateLike) -> dt.date:
        """``day`` when it is a business day, otherwise the next one."""
        day = as_date(day)
        if self._calendar.is_business_day(day):
            return day
        return self._calendar.next_business_day(day)

    def credit_effective_date(self, debit_effective_date: DateLike) -> dt.date:
        return self._calendar.add_business_days(debit_effective_date, CREDIT_SETTLEMENT_OFFSET)

    def release_effective_date(self, release_date: DateLike) -> dt.date:
        return self._calendar.add_business_days(self.ach_effective_date(release_date), RELEASE_LEAD_DAYS)

    def is_valid_effective_date(self, day: DateLike) -> bool:
        return self._calendar.is_business_day(day)

    def next_valid_effective_date(self, day: DateLike) -> dt.date:
        day = as_date(day)
        if self.is_valid_effective_date(day):
            return day
        return self._calendar.next_business_day(day)

    def target_effective_date(self, release_date: DateLike, file_type: FileType) -> dt.date:
        """Effective date carried by a file of ``file_type`` released on ``release_date``."""
        debit_date = self.release_effective_date(release_date)
        if file_type == FileType.CREDIT:
            return self.credit_effective_date(debit_date)
        return debit_date
