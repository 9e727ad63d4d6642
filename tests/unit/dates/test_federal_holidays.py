"""Tests for holiday snapshots and the computed federal schedule."""

from __future__ import annotations

import datetime as dt

from clearhouse.calendar.holidays import Holiday, HolidayCalendar, federal_holidays


def _dates(year: int) -> dict[str, dt.date]:
    return {h.name: h.date for h in federal_holidays(year)}


class TestFederalHolidays:
    def test_ten_recurring_holidays(self):
        holidays = federal_holidays(2024)
        assert len(holidays) == 10
        assert all(h.recurring for h in holidays)

    def test_2024_schedule(self):
        dates = _dates(2024)
        assert dates["New Year's Day"] == dt.date(2024, 1, 1)
        assert dates["Martin Luther King Jr. Day"] == dt.date(2024, 1, 15)
        assert dates["Presidents Day"] == dt.date(2024, 2, 19)
        assert dates["Memorial Day"] == dt.date(2024, 5, 27)
        assert dates["Independence Day"] == dt.date(2024, 7, 4)
        assert dates["Labor Day"] == dt.date(2024, 9, 2)
        assert dates["Columbus Day"] == dt.date(2024, 10, 14)
        assert dates["Veterans Day"] == dt.date(2024, 11, 11)
        assert dates["Thanksgiving Day"] == dt.date(2024, 11, 28)
        assert dates["Christmas Day"] == dt.date(2024, 12, 25)

    def test_saturday_observed_on_friday(self):
        assert _dates(2026)["Independence Day"] == dt.date(2026, 7, 3)

    def test_sunday_observed_on_monday(self):
        assert _dates(2022)["Christmas Day"] == dt.date(2022, 12, 26)

    def test_new_year_on_saturday_moves_into_previous_year(self):
        assert _dates(2022)["New Year's Day"] == dt.date(2021, 12, 31)


class TestHolidayRows:
    def test_from_row_accepts_iso_string(self):
        holiday = Holiday.from_row({"date": "2024-07-04", "recurring": True, "name": "Independence Day"})
        assert holiday == Holiday(date=dt.date(2024, 7, 4), recurring=True, name="Independence Day")

    def test_from_row_accepts_timestamp_string(self):
        assert Holiday.from_row({"date": "2024-07-04T00:00:00Z"}).date == dt.date(2024, 7, 4)

    def test_from_row_accepts_datetime(self):
        assert Holiday.from_row({"date": dt.datetime(2024, 7, 4, 9, 30)}).date == dt.date(2024, 7, 4)

    def test_from_row_defaults(self):
        holiday = Holiday.from_row({"date": dt.date(2024, 1, 1)})
        assert holiday.recurring is False
        assert holiday.name == ""


class TestHolidayCalendar:
    def test_membership_and_names(self):
        snapshot = HolidayCalendar.from_rows([
            {"date": "2024-01-01", "name": "New Year's Day"},
            {"date": "2024-07-04", "name": "Independence Day"},
        ])
        assert dt.date(2024, 7, 4) in snapshot
        assert dt.date(2024, 7, 5) not in snapshot
        assert snapshot.name_for(dt.date(2024, 1, 1)) == "New Year's Day"
        assert snapshot.name_for(dt.date(2024, 1, 2)) is None

    def test_duplicate_dates_collapse(self):
        snapshot = HolidayCalendar([
            Holiday(date=dt.date(2024, 1, 1), name="first"),
            Holiday(date=dt.date(2024, 1, 1), name="second"),
        ])
        assert len(snapshot) == 1
        assert snapshot.name_for(dt.date(2024, 1, 1)) == "first"
