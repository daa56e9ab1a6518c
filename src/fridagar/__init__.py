from .__version__ import __version__
from .days import DayRecord, DayKey, HolidayKey, SpecialDayKey, get_day_key
from .calculations import compute_year, YearCache
from .calendars import IcelandicCalendar, get_is_calendar
from .calendars import get_all_days, get_holidays, get_other_days, get_all_days_keyed, is_special_day, is_holiday, workdays_from_date
