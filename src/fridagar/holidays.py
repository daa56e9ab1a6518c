from abc import ABC, abstractmethod
import calendar
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Self

from dateutil.relativedelta import relativedelta, weekday, MO, TH, FR, SA, SU


DAY_MS = 24 * 3600 * 1000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_DATE = _EPOCH.date()


class Season(Enum):
    SUMMER = 'summer'
    WINTER = 'winter'


def easter_sunday(year: int) -> date:
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def _new_year_weekday(year: int) -> int:
    # Monday is 0, as in date.weekday(). Valid for years outside the date range too.
    days_before = 365 * (year - 1) + (year - 1) // 4 - (year - 1) // 100 + (year - 1) // 400
    return days_before % 7


@lru_cache(maxsize=None)
def rimspillir(year: int) -> int:
    '''
    Returns 1 if the given year is a "rímspilliár", 0 otherwise.

    A rímspilliár is a year followed by a leap year whose preceding year
    ended on a Saturday. The value shifts the anchor date of Bóndadagur
    (following year) and Fyrsti vetrardagur (same year).
    '''
    is_rimspilliar = calendar.isleap(year + 1) and _new_year_weekday(year) == 6
    return 1 if is_rimspilliar else 0


def find_next_weekday(year: int, month: int, day: int, target: weekday) -> date:
    '''First date on or after year-month-day falling on the target weekday.'''
    return date(year, month, day) + relativedelta(weekday=target)


_SOLSTICE_INTERVAL_MS = int((56.5 + 47 * 60 + 5 * 3600 + 365 * 86400) * 1000)
_SOLSTICE_BASE_YEAR = 2016
_SOLSTICE_BASE_MS = {
    Season.SUMMER: (datetime(2016, 6, 20, 22, 34, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1),
    Season.WINTER: (datetime(2016, 12, 21, 10, 44, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1),
}

def solstice(year: int, season: Season) -> date:
    '''Approximate solstice date, one tropical year per year away from the 2016 solstices.'''
    time_ms = _SOLSTICE_BASE_MS[season] + _SOLSTICE_INTERVAL_MS * (year - _SOLSTICE_BASE_YEAR)
    return _EPOCH_DATE + timedelta(days=time_ms // DAY_MS)


class HolidayRule(ABC):
    @abstractmethod
    def get_date(self, year: int) -> date:
        pass

    @abstractmethod
    def copy(self) -> Self:
        pass

    def __copy__(self) -> Self:
        return self.copy()


class MonthDayRule(HolidayRule):
    def __init__(self, month: int, day: int):
        self.month = month
        self.day = day

    def get_date(self, year: int) -> date:
        return date(year, self.month, self.day)

    def copy(self) -> Self:
        return MonthDayRule(self.month, self.day)


class EasterOffsetRule(HolidayRule):
    def __init__(self, days: int):
        self.days = days

    def get_date(self, year: int) -> date:
        return easter_sunday(year) + timedelta(days=self.days)

    def copy(self) -> Self:
        return EasterOffsetRule(self.days)


class NextWeekdayRule(HolidayRule):
    def __init__(self, month: int, day: int, weekday: weekday, rimspillir_year_offset: int | None=None):
        '''
        rimspillir_year_offset, when given, shifts the anchor day by one if
        year + rimspillir_year_offset is a rímspilliár.
        '''
        self.month = month
        self.day = day
        self.weekday = weekday
        self.rimspillir_year_offset = rimspillir_year_offset

    def get_date(self, year: int) -> date:
        day = self.day
        if self.rimspillir_year_offset is not None:
            day += rimspillir(year + self.rimspillir_year_offset)
        return find_next_weekday(year, self.month, day, self.weekday)

    def copy(self) -> Self:
        return NextWeekdayRule(self.month, self.day, self.weekday, rimspillir_year_offset=self.rimspillir_year_offset)


class SeamensDayRule(HolidayRule):
    '''First Sunday of June, moved a week later when Whit Sunday takes the first one.'''
    def get_date(self, year: int) -> date:
        whit_sunday = easter_sunday(year) + timedelta(days=49)
        first_june_week = whit_sunday.month == 6 and whit_sunday.day < 8
        return find_next_weekday(year, 6, 8 if first_june_week else 1, SU)

    def copy(self) -> Self:
        return SeamensDayRule()


class DaysAfterRule(HolidayRule):
    def __init__(self, base_rule: HolidayRule, days: int):
        self.base_rule = base_rule
        self.days = days

    def get_date(self, year: int) -> date:
        return self.base_rule.get_date(year) + timedelta(days=self.days)

    def copy(self) -> Self:
        return DaysAfterRule(self.base_rule.copy(), self.days)


class SolsticeRule(HolidayRule):
    def __init__(self, season: Season):
        self.season = season

    def get_date(self, year: int) -> date:
        return solstice(year, self.season)

    def copy(self) -> Self:
        return SolsticeRule(self.season)


BONDADAGUR_RULE = NextWeekdayRule(1, 19, FR, rimspillir_year_offset=-1)
SUMARDAGURINN_FYRSTI_RULE = NextWeekdayRule(4, 19, TH)
VERSLUNARMANNA_RULE = NextWeekdayRule(8, 1, MO)
FYRSTI_VETRARDAGUR_RULE = NextWeekdayRule(10, 21, SA, rimspillir_year_offset=0)
