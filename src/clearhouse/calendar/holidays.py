"""Holiday snapshots and the default U.S. federal holiday schedule."""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

MONDAY, THURSDAY, SATURDAY, SUNDAY = 0, 3, 5, 6


class Holiday(BaseModel):
    """A single non-banking date."""

    date: dt.date
    recurring: bool = False
    name: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Holiday":
        """Build from a provider row (``date`` as ISO string, date or datetime)."""
        raw = row["date"]
        if isinstance(raw, dt.datetime):
            raw = raw.date()
        elif isinstance(raw, str):
            raw = dt.date.fromisoformat(raw[:10])
        return cls(date=raw, recurring=bool(row.get("recurring", False)), name=row.get("name", ""))


class HolidayCalendar:
    """Immutable snapshot of holiday dates.

    Never mutated after construction; a refreshed holiday list produces a new
    snapshot that replaces the old one wholesale.
    """

    __slots__ = ("_dates", "_names")

    def __init__(self, holidays: Iterable[Holiday] = ()) -> None:
        names: dict[dt.date, str] = {}
        for holiday in holidays:
            names.setdefault(holiday.date, holiday.name)
        self._names = names
        self._dates = frozenset(names)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> "HolidayCalendar":
        return cls(Holiday.from_row(row) for row in rows)

    def __contains__(self, day: dt.date) -> bool:
        return day in self._dates

    def __len__(self) -> int:
        return len(self._dates)

    @property
    def dates(self) -> frozenset[dt.date]:
        return self._dates

    def name_for(self, day: dt.date) -> str | None:
        return self._names.get(day)


# ---------------------------------------------------------------------------
# Default federal schedule
# ---------------------------------------------------------------------------

def _nth_weekday(year: int, month: int, weekday: int, occurrence: int) -> dt.date:
    first = dt.date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + dt.timedelta(days=offset + (occurrence - 1) * 7)


def _last_weekday(year: int, month: int, weekday: int) -> dt.date:
    last = dt.date(year, month, calendar.monthrange(year, month)[1])
    return last - dt.timedelta(days=(last.weekday() - weekday) % 7)


def _observed(day: dt.date) -> dt.date:
    """Saturday holidays are observed Friday, Sunday holidays Monday."""
    if day.weekday() == SATURDAY:
        return day - dt.timedelta(days=1)
    if day.weekday() == SUNDAY:
        return day + dt.timedelta(days=1)
    return day


def federal_holidays(year: int) -> list[Holiday]:
    """The ten U.S. federal holidays for ``year`` on their observed dates."""
    schedule = [
        ("New Year's Day", dt.date(year, 1, 1)),
        ("Martin Luther King Jr. Day", _nth_weekday(year, 1, MONDAY, 3)),
        ("Presidents Day", _nth_weekday(year, 2, MONDAY, 3)),
        ("Memorial Day", _last_weekday(year, 5, MONDAY)),
        ("Independence Day", dt.date(year, 7, 4)),
        ("Labor Day", _nth_weekday(year, 9, MONDAY, 1)),
        ("Columbus Day", _nth_weekday(year, 10, MONDAY, 2)),
        ("Veterans Day", dt.date(year, 11, 11)),
        ("Thanksgiving Day", _nth_weekday(year, 11, THURSDAY, 4)),
        ("Christmas Day", dt.date(year, 12, 25)),
    ]
    return [Holiday(date=_observed(day), recurring=True, name=name) for name, day in schedule]
