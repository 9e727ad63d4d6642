"""Business-day policy over a swappable holiday snapshot.

``next_business_day``/``previous_business_day`` are strict: they always move
at least one calendar day. "Keep the date when it is already a business day"
lives in ``EffectiveDatePolicy.ach_effective_date``.
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
from typing import Iterable, Literal, Union

from clearhouse.calendar.holidays import Holiday, HolidayCalendar
from clearhouse.models.validation import BusinessDayInfo

logger = logging.getLogger(__name__)

BetweenConvention = Literal["inclusive", "signed_half_open"]
DateLike = Union[dt.date, dt.datetime]

ONE_DAY = dt.timedelta(days=1)
WEEKEND = frozenset({5, 6})  # Saturday, Sunday


def as_date(value: DateLike) -> dt.date:
    """Drop any time-of-day component."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


class BusinessDayCalendar:
    """Answers business-day questions against the current holiday snapshot.

    Queries read ``self._calendar`` once and work on that snapshot, so an
    ``update_holidays`` running concurrently is never observed half-applied.
    """

    def __init__(
        self,
        holidays: HolidayCalendar | Iterable[Holiday] = (),
        between_convention: BetweenConvention = "inclusive",
    ) -> None:
        self._lock = threading.Lock()
        self._calendar = holidays if isinstance(holidays, HolidayCalendar) else HolidayCalendar(holidays)
        self._between_convention = between_convention

    @property
    def calendar(self) -> HolidayCalendar:
        return self._calendar

    def update_holidays(self, holidays: HolidayCalendar | Iterable[Holiday]) -> None:
        """Replace the whole holiday set in one reference swap."""
        snapshot = holidays if isinstance(holidays, HolidayCalendar) else HolidayCalendar(holidays)
        with self._lock:
            self._calendar = snapshot
        logger.info("Holiday calendar replaced (%d dates)", len(snapshot))

    # ---- predicates ----

    def is_holiday(self, day: DateLike) -> bool:
        return as_date(day) in self._calendar

    def is_business_day(self, day: DateLike) -> bool:
        day = as_date(day)
        if day.weekday() in WEEKEND:
            return False
        return day not in self._calendar

    # ---- shifting ----

    def next_business_day(self, day: DateLike) -> dt.date:
        current = as_date(day) + ONE_DAY
        while not self.is_business_day(current):
            current += ONE_DAY
        return current

    def previous_business_day(self, day: DateLike) -> dt.date:
        current = as_date(day) - ONE_DAY
        while not self.is_business_day(current):
            current -= ONE_DAY
        return current

    def add_business_days(self, day: DateLike, days: int) -> dt.date:
        current = as_date(day)
        step = self.next_business_day if days > 0 else self.previous_business_day
        for _ in range(abs(days)):
            current = step(current)
        return current

    def subtract_business_days(self, day: DateLike, days: int) -> dt.date:
        return self.add_business_days(day, -days)

    # ---- counting ----

    def business_days_between(
        self, start: DateLike, end: DateLike, convention: BetweenConvention | None = None
    ) -> int:
        """Count business days between two dates.

        ``inclusive``: business days in ``[min, max]``, never negative.
        ``signed_half_open``: business days in ``[start, end)``; negated and
        taken over ``[end, start)`` when ``end`` precedes ``start``.
        """
        convention = convention or self._between_convention
        start, end = as_date(start), as_date(end)
        earlier, later = sorted((start, end))

        if convention == "inclusive":
            return self._count(earlier, later + ONE_DAY)
        if convention == "signed_half_open":
            count = self._count(earlier, later)
            return count if start <= end else -count
        raise ValueError(f"Unknown business-day convention: {convention!r}")

    def _count(self, first: dt.date, stop: dt.date) -> int:
        count = 0
        current = first
        while current < stop:
            if self.is_business_day(current):
                count += 1
            current += ONE_DAY
        return count

    def business_day_info(self, day: DateLike) -> BusinessDayInfo:
        day = as_date(day)
        snapshot = self._calendar
        return BusinessDayInfo(
            date=day,
            is_business_day=self.is_business_day(day),
            is_holiday=day in snapshot,
            holiday_name=snapshot.name_for(day) or None,
            next_business_day=self.next_business_day(day),
        )
