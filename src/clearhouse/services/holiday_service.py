"""HolidayService: keeps the business-day calendar in step with the provider."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable

from clearhouse.calendar.business_days import BusinessDayCalendar
from clearhouse.calendar.holidays import HolidayCalendar, federal_holidays
from clearhouse.core.exceptions import CacheError, HolidayStoreError
from clearhouse.core.protocols import IHolidayProvider

logger = logging.getLogger(__name__)


class HolidayService:
    """Reloads holidays at most once per ``refresh_hours``.

    A provider failure falls back to the computed federal schedule for the
    current year and ``fallback_years`` following years.
    """

    def __init__(
        self,
        provider: IHolidayProvider,
        calendar: BusinessDayCalendar,
        *,
        refresh_hours: int = 24,
        fallback_years: int = 1,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self._provider = provider
        self._calendar = calendar
        self._refresh_after = dt.timedelta(hours=refresh_hours)
        self._fallback_years = fallback_years
        self._clock = clock
        self._last_updated: dt.datetime | None = None

    @property
    def last_updated(self) -> dt.datetime | None:
        return self._last_updated

    def needs_refresh(self) -> bool:
        if self._last_updated is None:
            return True
        return self._clock() - self._last_updated > self._refresh_after

    def refresh(self) -> HolidayCalendar:
        now = self._clock()
        try:
            snapshot = HolidayCalendar.from_rows(self._provider.get_holidays())
        except (HolidayStoreError, CacheError) as exc:
            logger.warning("Failed to load holidays (%s); using federal defaults", exc)
            snapshot = self.default_calendar(now.year)
        self._calendar.update_holidays(snapshot)
        self._last_updated = now
        return snapshot

    def refresh_if_needed(self) -> bool:
        if not self.needs_refresh():
            return False
        self.refresh()
        return True

    def default_calendar(self, year: int) -> HolidayCalendar:
        years = range(year, year + self._fallback_years + 1)
        return HolidayCalendar(h for y in years for h in federal_holidays(y))
