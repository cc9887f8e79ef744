from datetime import date, datetime

import pytest

from apps.core.domain import dates


def test_parse_date_accepts_strings_dates_and_datetimes():
    assert dates.parse_date('2024-03-05') == date(2024, 3, 5)
    assert dates.parse_date('2024-03-05T23:10:00') == date(2024, 3, 5)
    assert dates.parse_date(datetime(2024, 3, 5, 8, 0)) == date(2024, 3, 5)
    assert dates.parse_date(date(2024, 3, 5)) == date(2024, 3, 5)


def test_parse_date_rejects_other_types():
    with pytest.raises(TypeError):
        dates.parse_date(20240305)


def test_add_months_clamps_to_month_end():
    assert dates.add_months('2024-01-31', 1) == date(2024, 2, 29)
    assert dates.add_months('2023-11-30', 3) == date(2024, 2, 29)


def test_last_n_days_is_oldest_first_and_includes_today():
    days = dates.last_n_days(3, today=date(2024, 1, 2))
    assert days == [date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 2)]


def test_week_range_starts_on_monday():
    assert dates.week_range(date(2024, 1, 4)) == (date(2024, 1, 1), date(2024, 1, 7))


def test_month_range():
    assert dates.month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_iso_week_key_uses_iso_year():
    assert dates.iso_week_key('2024-01-01') == '2024-W01'
    assert dates.iso_week_key('2021-01-03') == '2020-W53'


def test_format_relative():
    today = date(2024, 5, 10)
    assert dates.format_relative(today, today) == "Dzisiaj"
    assert dates.format_relative('2024-05-09', today) == "Wczoraj"
    assert dates.format_relative('2024-05-07', today) == "3 dni temu"
    assert dates.format_relative('2024-05-12', today) == "za 2 dni"


def test_local_today_respects_timezone():
    assert isinstance(dates.local_today('Europe/Warsaw'), date)
