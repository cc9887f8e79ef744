# apps/checkins/domain/streaks.py
from datetime import date, timedelta
from typing import Iterable, Optional

from apps.core.domain.dates import DateLike, local_today, parse_date


def calculate_streak(dates: Iterable[DateLike], today: Optional[date] = None) -> int:
    """
    Liczba kolejnych dni z check-inem, kończąca się dzisiaj albo wczoraj.

    Kilka wpisów z tego samego dnia liczy się jako jeden dzień.
    """
    days = sorted({parse_date(d) for d in dates}, reverse=True)
    if not days:
        return 0

    today = today or local_today()
    if days[0] not in (today, today - timedelta(days=1)):
        return 0  # Przerwana seria

    streak = 0
    expected = days[0]
    for day in days:
        if day != expected:
            break  # Luka - koniec serii
        streak += 1
        expected = day - timedelta(days=1)

    return streak


def calculate_longest_streak(dates: Iterable[DateLike]) -> int:
    """Najdłuższa seria w całej historii (bez względu na dzisiaj)."""
    days = sorted({parse_date(d) for d in dates})
    longest = current = 0
    previous = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous = day
    return longest
