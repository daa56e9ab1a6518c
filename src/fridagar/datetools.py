from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Iterable

from multimethod import multimethod

from .days import DayRecord


@multimethod
def to_calendar_date(value: date) -> date:
    return date(value.year, value.month, value.day)

@multimethod
def to_calendar_date(value: datetime) -> date:
    # Aware values keep the calendar date of their own timezone.
    return value.date()


def is_workday(day: date, holidays: Iterable[DayRecord], include_half_days: bool=False) -> bool:
    if day.weekday() >= 5:
        return False
    for holiday in holidays:
        if holiday.date == day and not (include_half_days and holiday.half_day):
            return False
    return True

def add_workdays(day: date, days: int, holidays_for_year: Callable[[int], Iterable[DayRecord]],
                 include_half_days: bool=False) -> date:
    '''
    Steps one calendar day at a time until abs(days) workdays have been passed.

    holidays_for_year is called with the year of every visited date and must
    return the holidays (not special days) of that year.
    '''
    days_to_add = abs(days)
    sign = 1 if days > 0 else -1
    while days_to_add > 0:
        day += timedelta(days=sign)
        if is_workday(day, holidays_for_year(day.year), include_half_days=include_half_days):
            days_to_add -= 1
    return day
