from datetime import date

import pytest

from fridagar.calculations import compute_year, sort_days, YearCache, DAY_TABLE
from fridagar.days import DayRecord, HolidayKey, SpecialDayKey, get_day_key


class FakeClock:
    def __init__(self, now: float=0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_day_table_uses_every_key_once():
    keys = [definition.key for definition in DAY_TABLE]
    assert len(keys) == len(set(keys)) == len(HolidayKey) + len(SpecialDayKey) == 31


@pytest.mark.parametrize('year', [1583, 1900, 2011, 2023, 2024, 2100, 9998])
def test_compute_year_has_every_key_sorted(year):
    days = compute_year(year)
    assert len(days) == 31, f'{year}: expected 31 days, got {len(days)}'
    assert {day.key for day in days} == set(HolidayKey) | set(SpecialDayKey)
    assert all(day.date.year == year for day in days), f'{year}: days outside the year'
    sort_keys = [(day.date, not day.holiday) for day in days]
    assert sort_keys == sorted(sort_keys), f'{year}: days are not sorted'


def test_compute_year_holiday_flags():
    days = compute_year(2024)
    assert sum(day.holiday for day in days) == 16
    half_days = {day.key for day in days if day.half_day}
    assert half_days == {HolidayKey.ADFANGA, HolidayKey.GAMLARS}


def test_compute_year_easter_days():
    days = {day.key: day.date for day in compute_year(2024)}
    assert days[HolidayKey.PASKA] == date(2024, 3, 31)
    assert days[HolidayKey.SKIR] == date(2024, 3, 28)
    assert days[HolidayKey.FOSLANGI] == date(2024, 3, 29)
    assert days[HolidayKey.PASKA2] == date(2024, 4, 1)
    assert days[HolidayKey.UPPST] == date(2024, 5, 9)
    assert days[HolidayKey.HVITAS] == date(2024, 5, 19)
    assert days[HolidayKey.HVITAS2] == date(2024, 5, 20)
    assert days[SpecialDayKey.BOLLU] == date(2024, 2, 12)
    assert days[SpecialDayKey.SPRENGI] == date(2024, 2, 13)
    assert days[SpecialDayKey.OSKU] == date(2024, 2, 14)


def test_day_record_rejects_half_day_special_day():
    with pytest.raises(ValueError):
        DayRecord(date(2024, 12, 23), 'Þorláksmessa', SpecialDayKey.THORL, False, half_day=True)


def test_day_record_rejects_mismatched_key():
    with pytest.raises(ValueError):
        DayRecord(date(2024, 12, 25), 'Jóladagur', HolidayKey.JOLA, False)


def test_day_record_copy():
    record = DayRecord(date(2024, 12, 24), 'Aðfangadagur', HolidayKey.ADFANGA, True, half_day=True)
    copied = record.copy()
    assert copied == record
    assert copied is not record


def test_get_day_key():
    assert get_day_key('jun17') is HolidayKey.JUN17
    assert get_day_key('þrettand') is SpecialDayKey.THRETTAND
    with pytest.raises(ValueError):
        get_day_key('xmas')


def test_year_cache_reuses_entries():
    calls = []
    def compute(year: int):
        calls.append(year)
        return compute_year(year)
    cache = YearCache(clock=FakeClock(), compute=compute)
    first = cache.get(2024)
    second = cache.get(2024)
    assert first is second
    assert calls == [2024]
    assert 2024 in cache and len(cache) == 1


def test_year_cache_evicts_after_ttl():
    clock = FakeClock()
    calls = []
    def compute(year: int):
        calls.append(year)
        return compute_year(year)
    cache = YearCache(ttl=0.5, clock=clock, compute=compute)
    cache.get(2023)
    clock.now = 0.4
    cache.get(2024)
    assert 2023 in cache

    clock.now = 0.5
    assert 2023 not in cache
    assert 2024 in cache
    cache.get(2023)
    assert calls == [2023, 2024, 2023]

    clock.now = 10.0
    cache.evict_expired()
    assert len(cache) == 0


def test_year_cache_clear():
    cache = YearCache(clock=FakeClock())
    cache.get(2020)
    cache.get(2021)
    cache.clear()
    assert len(cache) == 0


def test_same_date_special_days_keep_table_order():
    # Öskudagur and Valentínusardagur are both on 2024-02-14.
    days = [day for day in compute_year(2024) if day.date == date(2024, 2, 14)]
    assert [day.key for day in days] == [SpecialDayKey.OSKU, SpecialDayKey.VALENT]


def test_sort_days_puts_holiday_first_on_same_date():
    special = DayRecord(date(2024, 6, 17), 'Jónsmessa', SpecialDayKey.JONSM, False)
    holiday = DayRecord(date(2024, 6, 17), 'Þjóðhátíðardagurinn', HolidayKey.JUN17, True)
    earlier = DayRecord(date(2024, 6, 1), 'Sjómannadagurinn', SpecialDayKey.SJOMANNA, False)
    for records in ([special, holiday, earlier], [holiday, special, earlier], [earlier, special, holiday]):
        assert [day.key for day in sort_days(records)] == [SpecialDayKey.SJOMANNA, HolidayKey.JUN17, SpecialDayKey.JONSM]


def test_compute_year_out_of_date_range():
    with pytest.raises(ValueError):
        compute_year(0)
