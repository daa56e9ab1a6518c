from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
import logging
import threading
import time

from .days import DayKey, DayRecord, HolidayKey, SpecialDayKey
from .holidays import (HolidayRule, MonthDayRule, EasterOffsetRule, SeamensDayRule, DaysAfterRule,
                       SolsticeRule, Season, BONDADAGUR_RULE, SUMARDAGURINN_FYRSTI_RULE, VERSLUNARMANNA_RULE,
                       FYRSTI_VETRARDAGUR_RULE)


logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DayDefinition:
    key: DayKey
    description: str
    rule: HolidayRule
    half_day: bool = field(default=False)

    def get_record(self, year: int) -> DayRecord:
        return DayRecord(self.rule.get_date(year), self.description, self.key,
                         isinstance(self.key, HolidayKey), half_day=self.half_day)


DAY_TABLE: tuple[DayDefinition, ...] = (
    DayDefinition(HolidayKey.NYARS, 'Nýársdagur', MonthDayRule(1, 1)),
    DayDefinition(SpecialDayKey.THRETTAND, 'Þrettándinn', MonthDayRule(1, 6)),
    DayDefinition(SpecialDayKey.BONDA, 'Bóndadagur', BONDADAGUR_RULE),
    DayDefinition(SpecialDayKey.BOLLU, 'Bolludagur', EasterOffsetRule(-48)),
    DayDefinition(SpecialDayKey.SPRENGI, 'Sprengidagur', EasterOffsetRule(-47)),
    DayDefinition(SpecialDayKey.OSKU, 'Öskudagur', EasterOffsetRule(-46)),
    DayDefinition(SpecialDayKey.VALENT, 'Valentínusardagur', MonthDayRule(2, 14)),
    DayDefinition(SpecialDayKey.KONU, 'Konudagur', DaysAfterRule(BONDADAGUR_RULE, 30)),
    DayDefinition(HolidayKey.SKIR, 'Skírdagur', EasterOffsetRule(-3)),
    DayDefinition(HolidayKey.FOSLANGI, 'Föstudagurinn langi', EasterOffsetRule(-2)),
    DayDefinition(HolidayKey.PASKA, 'Páskadagur', EasterOffsetRule(0)),
    DayDefinition(HolidayKey.PASKA2, 'Annar í páskum', EasterOffsetRule(1)),
    DayDefinition(HolidayKey.SUMAR1, 'Sumardagurinn fyrsti', SUMARDAGURINN_FYRSTI_RULE),
    DayDefinition(HolidayKey.MAI1, 'Verkalýðsdagurinn', MonthDayRule(5, 1)),
    DayDefinition(HolidayKey.UPPST, 'Uppstigningardagur', EasterOffsetRule(39)),
    DayDefinition(HolidayKey.HVITAS, 'Hvítasunnudagur', EasterOffsetRule(49)),
    DayDefinition(HolidayKey.HVITAS2, 'Annar í Hvítasunnu', EasterOffsetRule(50)),
    DayDefinition(SpecialDayKey.SJOMANNA, 'Sjómannadagurinn', SeamensDayRule()),
    DayDefinition(HolidayKey.JUN17, 'Þjóðhátíðardagurinn', MonthDayRule(6, 17)),
    DayDefinition(SpecialDayKey.SUMSOLST, 'Sumarsólstöður', SolsticeRule(Season.SUMMER)),
    DayDefinition(SpecialDayKey.JONSM, 'Jónsmessa', MonthDayRule(6, 24)),
    DayDefinition(HolidayKey.VERSLM, 'Frídagur verslunarmanna', VERSLUNARMANNA_RULE),
    DayDefinition(SpecialDayKey.VETUR1, 'Fyrsti vetrardagur', FYRSTI_VETRARDAGUR_RULE),
    DayDefinition(SpecialDayKey.HREKKJA, 'Hrekkjavaka', MonthDayRule(10, 31)),
    DayDefinition(SpecialDayKey.FULLV, 'Fullveldisdagurinn', MonthDayRule(12, 1)),
    DayDefinition(SpecialDayKey.VETSOLST, 'Vetrarsólstöður', SolsticeRule(Season.WINTER)),
    DayDefinition(SpecialDayKey.THORL, 'Þorláksmessa', MonthDayRule(12, 23)),
    DayDefinition(HolidayKey.ADFANGA, 'Aðfangadagur', MonthDayRule(12, 24), half_day=True),
    DayDefinition(HolidayKey.JOLA, 'Jóladagur', MonthDayRule(12, 25)),
    DayDefinition(HolidayKey.JOLA2, 'Annar í Jólum', MonthDayRule(12, 26)),
    DayDefinition(HolidayKey.GAMLARS, 'Gamlársdagur', MonthDayRule(12, 31), half_day=True),
)


def _check_day_table(day_table: tuple[DayDefinition, ...]):
    keys = [definition.key for definition in day_table]
    expected_keys = set(HolidayKey) | set(SpecialDayKey)
    duplicated = {key for key in keys if keys.count(key) > 1}
    missing = expected_keys - set(keys)
    if duplicated or missing:
        raise RuntimeError(f'Day table must use every day key exactly once. Missing: {missing}, duplicated: {duplicated}')

_check_day_table(DAY_TABLE)


def sort_days(records: Iterable[DayRecord]) -> tuple[DayRecord, ...]:
    '''Sorts by date, holidays ahead of special days falling on the same date.'''
    return tuple(sorted(records, key=lambda record: (record.date, not record.holiday)))

def compute_year(year: int) -> tuple[DayRecord, ...]:
    '''
    All holidays and special days of a year, sorted by date.

    The year is not validated, but records are datetime.date values, so years
    outside datetime.MINYEAR..datetime.MAXYEAR (1..9999) raise ValueError or
    OverflowError from the date type.
    '''
    return sort_days(definition.get_record(year) for definition in DAY_TABLE)


@dataclass(slots=True)
class YearCache:
    '''
    Per-year memo of compute_year results.

    Entries expire ttl seconds (measured by clock) after being computed and
    are evicted on the next access. Cached tuples are shared, so callers must
    copy records before handing them out.
    '''
    ttl: float = field(default=0.5)
    clock: Callable[[], float] = field(default=time.monotonic)
    compute: Callable[[int], tuple[DayRecord, ...]] = field(default=compute_year)

    _entries: dict[int, tuple[float, tuple[DayRecord, ...]]] = field(init=False, default_factory=dict)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def get(self, year: int) -> tuple[DayRecord, ...]:
        with self._lock:
            self._evict_expired()
            entry = self._entries.get(year)
            if entry is not None:
                return entry[1]
        records = self.compute(year)
        logger.debug('Computed %d days for year %d', len(records), year)
        with self._lock:
            _, cached = self._entries.setdefault(year, (self.clock() + self.ttl, records))
        return cached

    def evict_expired(self):
        with self._lock:
            self._evict_expired()

    def _evict_expired(self):
        now = self.clock()
        expired = [year for year, (expires_at, _) in self._entries.items() if expires_at <= now]
        for year in expired:
            del self._entries[year]
        if expired:
            logger.debug('Evicted cached years %s', expired)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._entries)

    def __contains__(self, year: int) -> bool:
        with self._lock:
            self._evict_expired()
            return year in self._entries
