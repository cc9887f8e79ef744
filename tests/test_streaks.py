from datetime import date, timedelta

from apps.checkins.domain.streaks import calculate_longest_streak, calculate_streak

TODAY = date(2024, 6, 15)


def days_ago(n):
    return TODAY - timedelta(days=n)


def test_streak_counts_consecutive_days_ending_today():
    assert calculate_streak([TODAY, days_ago(1), days_ago(2)], today=TODAY) == 3


def test_streak_can_end_yesterday():
    assert calculate_streak([days_ago(1), days_ago(2)], today=TODAY) == 2


def test_streak_broken_when_latest_is_older_than_yesterday():
    assert calculate_streak([days_ago(2)], today=TODAY) == 0


def test_empty_streak():
    assert calculate_streak([], today=TODAY) == 0


def test_streak_stops_at_first_gap():
    assert calculate_streak([TODAY, days_ago(1), days_ago(3), days_ago(4)], today=TODAY) == 2


def test_streak_ignores_duplicates_and_order():
    dates = [days_ago(1).isoformat(), TODAY.isoformat(), TODAY.isoformat(), days_ago(1)]
    assert calculate_streak(dates, today=TODAY) == 2


def test_longest_streak():
    dates = [days_ago(10), days_ago(9), days_ago(8), days_ago(5), TODAY]
    assert calculate_longest_streak(dates) == 3
    assert calculate_longest_streak([]) == 0
