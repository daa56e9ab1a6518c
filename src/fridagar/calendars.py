from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from .calculations import YearCache
from .datetools import to_calendar_date, add_workdays
from .days import DayKey, DayRecord


@dataclass(slots=True)
class IcelandicCalendar:
    '''
    Icelandic public holidays and commonly celebrated "special" days.

    today provides the current date whenever a year or reference date is
    omitted. Every returned record is a fresh copy, so callers may mutate
    them freely.
    '''
    today: Callable[[], date] = field(default=date.today)
    cache: YearCache = field(default_factory=YearCache)

    def _resolve_year(self, year: int | None) -> int:
        return self.today().year if year is None else year

    def get_all_days(self, year: int | None=None, month: int | None=None) -> list[DayRecord]:
        '''
        All holidays and special days of year (default: current year), sorted
        by date. month (1-12) narrows the result to that month; any other
        month value gives an empty list.
        '''
        days = self.cache.get(self._resolve_year(year))
        if month is not None:
            days = [day for day in days if day.date.month == month]
        return [day.copy() for day in days]

    def get_holidays(self, year: int | None=None, month: int | None=None) -> list[DayRecord]:
        return [day for day in self.get_all_days(year, month) if day.holiday]

    def get_other_days(self, year: int | None=None, month: int | None=None) -> list[DayRecord]:
        return [day for day in self.get_all_days(year, month) if not day.holiday]

    def get_all_days_keyed(self, year: int | None=None) -> dict[DayKey, DayRecord]:
        return {day.key: day for day in self.get_all_days(year)}

    def is_special_day(self, day: date) -> DayRecord | None:
        if day is None:
            raise TypeError('A date is required.')
        day = to_calendar_date(day)
        for record in self.cache.get(day.year):
            if record.date == day:
                return record.copy()
        return None

    def is_holiday(self, day: date) -> DayRecord | None:
        record = self.is_special_day(day)
        return record if record is not None and record.holiday else None

    def workdays_from_date(self, days: int, ref_date: date | None=None, include_half_days: bool=False) -> date:
        '''
        Returns the days-th workday after (or before, for negative days) ref_date.

        Weekends and holidays are skipped. Half-day holidays are skipped too
        unless include_half_days is set. ref_date defaults to today.
        '''
        t = to_calendar_date(self.today() if ref_date is None else ref_date)
        if days == 0:
            return t

        holidays_by_year: dict[int, list[DayRecord]] = {}
        def holidays_for_year(year: int) -> list[DayRecord]:
            if year not in holidays_by_year:
                holidays_by_year[year] = [day for day in self.cache.get(year) if day.holiday]
            return holidays_by_year[year]

        return add_workdays(t, days, holidays_for_year, include_half_days=include_half_days)


_default_calendar = IcelandicCalendar()

def get_is_calendar() -> IcelandicCalendar:
    return _default_calendar


def get_all_days(year: int | None=None, month: int | None=None) -> list[DayRecord]:
    return _default_calendar.get_all_days(year, month)

def get_holidays(year: int | None=None, month: int | None=None) -> list[DayRecord]:
    return _default_calendar.get_holidays(year, month)

def get_other_days(year: int | None=None, month: int | None=None) -> list[DayRecord]:
    return _default_calendar.get_other_days(year, month)

def get_all_days_keyed(year: int | None=None) -> dict[DayKey, DayRecord]:
    return _default_calendar.get_all_days_keyed(year)

def is_special_day(day: date) -> DayRecord | None:
    return _default_calendar.is_special_day(day)

def is_holiday(day: date) -> DayRecord | None:
    return _default_calendar.is_holiday(day)

def workdays_from_date(days: int, ref_date: date | None=None, include_half_days: bool=False) -> date:
    return _default_calendar.workdays_from_date(days, ref_date=ref_date, include_half_days=include_half_days)
