from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Self


class HolidayKey(Enum):
    '''Identifiers for Icelandic public holidays.'''
    NYARS = 'nyars'
    SKIR = 'skir'
    FOSLANGI = 'foslangi'
    PASKA = 'paska'
    PASKA2 = 'paska2'
    SUMAR1 = 'sumar1'
    UPPST = 'uppst'
    MAI1 = 'mai1'
    HVITAS = 'hvitas'
    HVITAS2 = 'hvitas2'
    JUN17 = 'jun17'
    VERSLM = 'verslm'
    ADFANGA = 'adfanga'
    JOLA = 'jola'
    JOLA2 = 'jola2'
    GAMLARS = 'gamlars'


class SpecialDayKey(Enum):
    '''Identifiers for commonly celebrated days that are still workdays.'''
    THRETTAND = 'þrettand'
    BONDA = 'bonda'
    BOLLU = 'bollu'
    SPRENGI = 'sprengi'
    OSKU = 'osku'
    VALENT = 'valent'
    KONU = 'konu'
    SJOMANNA = 'sjomanna'
    SUMSOLST = 'sumsolst'
    JONSM = 'jonsm'
    VETUR1 = 'vetur1'
    HREKKJA = 'hrekkja'
    FULLV = 'fullv'
    VETSOLST = 'vetsolst'
    THORL = 'thorl'


DayKey = HolidayKey | SpecialDayKey


def get_day_key(value: str) -> DayKey:
    for key_enum in (HolidayKey, SpecialDayKey):
        try:
            return key_enum(value)
        except ValueError:
            continue
    raise ValueError(f'Unknown day key {value!r}.')


@dataclass(slots=True)
class DayRecord:
    date: date
    description: str
    key: DayKey
    holiday: bool
    half_day: bool = field(default=False)

    def __post_init__(self):
        if self.half_day and not self.holiday:
            raise ValueError(f'Special day {self.key.value} can not be a half-day holiday.')
        if isinstance(self.key, HolidayKey) != self.holiday:
            raise ValueError(f'Key {self.key.value} does not match holiday={self.holiday}.')

    def copy(self) -> Self:
        return DayRecord(self.date, self.description, self.key, self.holiday, half_day=self.half_day)

    def __copy__(self) -> Self:
        return self.copy()
