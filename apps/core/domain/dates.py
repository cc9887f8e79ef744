# apps/core/domain/dates.py
"""
Jedno miejsce na arytmetykę dat.

Wszystkie "dzisiaj" liczymy w strefie czasowej użytkownika (nie w UTC),
a przesunięcia miesięczne przez relativedelta (31.01 + 1 miesiąc = 28/29.02).
"""
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union

import pytz
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


def local_now(tz_name: Optional[str] = None) -> datetime:
    tz = pytz.timezone(tz_name or 'UTC')
    return datetime.now(pytz.utc).astimezone(tz)


def local_today(tz_name: Optional[str] = None) -> date:
    """Dzisiejsza data w strefie użytkownika."""
    return local_now(tz_name).date()


def parse_date(value: DateLike) -> date:
    """Akceptuje date, datetime albo ISO string ('2024-01-31' lub z czasem)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Nieobsługiwany typ daty: {type(value).__name__}")


def to_iso(value: DateLike) -> str:
    return parse_date(value).isoformat()


def add_days(value: DateLike, days: int) -> date:
    return parse_date(value) + timedelta(days=days)


def add_months(value: DateLike, months: int) -> date:
    return parse_date(value) + relativedelta(months=months)


def yesterday(today: Optional[date] = None) -> date:
    return add_days(today or local_today(), -1)


def days_between(later: DateLike, earlier: DateLike) -> int:
    return (parse_date(later) - parse_date(earlier)).days


def last_n_days(n: int, today: Optional[date] = None) -> List[date]:
    """Ostatnie n dni łącznie z dzisiejszym, od najstarszego."""
    today = today or local_today()
    return [today - timedelta(days=i) for i in range(n - 1, -1, -1)]


def week_range(day: Optional[date] = None) -> Tuple[date, date]:
    """Tydzień od poniedziałku do niedzieli."""
    day = day or local_today()
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_range(day: Optional[date] = None) -> Tuple[date, date]:
    day = day or local_today()
    start = day.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def iso_week_key(value: DateLike) -> str:
    """Klucz tygodnia ISO, np. '2024-W01' (sortuje się leksykalnie)."""
    iso_year, iso_week, _ = parse_date(value).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def format_relative(value: DateLike, today: Optional[date] = None) -> str:
    day = parse_date(value)
    today = today or local_today()
    delta = (today - day).days
    if delta == 0:
        return "Dzisiaj"
    if delta == 1:
        return "Wczoraj"
    if delta > 1:
        return f"{delta} dni temu"
    return f"za {-delta} dni"
