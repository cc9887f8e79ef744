# apps/time_tracking/domain/metrics.py
"""
Agregacje i pacing (czas faktyczny vs cel).

Funkcje są czyste: dostają listy już pobrane z bazy (modele, encje albo
słowniki) i niczego nie zapisują.
"""
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Optional


class PacingStatus(str, Enum):
    AHEAD = 'ahead'
    ON_TRACK = 'on_track'
    SLIGHTLY_BEHIND = 'slightly_behind'
    BEHIND = 'behind'


PACING_CSS = {
    PacingStatus.AHEAD: 'text-success',
    PacingStatus.ON_TRACK: 'text-success',
    PacingStatus.SLIGHTLY_BEHIND: 'text-warning',
    PacingStatus.BEHIND: 'text-danger',
}

MIN_TIMER_SECONDS = 60


def field_value(item, name: str):
    """Odczyt pola z modelu/encji albo ze słownika."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def round_half_up(value, digits: int = 1) -> float:
    # round() w Pythonie zaokrągla "do parzystej" - tu chcemy 0.25 -> 0.3
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_average(responses: Iterable, field: str = 'score'):
    """Średnia z pola (domyślnie score), zaokrąglona do 0.1. Pusta lista -> 0."""
    values = [float(field_value(r, field)) for r in responses]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def calculate_total_hours(entries: Iterable) -> float:
    return sum(float(field_value(e, 'hours') or 0) for e in entries)


def calculate_hours_by_group(
        entries: Iterable,
        key: Optional[Callable[[object], Hashable]] = None
) -> Dict[Hashable, float]:
    """Suma godzin per klucz (domyślnie bucket_id)."""
    key = key or (lambda e: field_value(e, 'bucket_id'))
    totals: Dict[Hashable, float] = {}
    for entry in entries:
        group = key(entry)
        totals[group] = totals.get(group, 0.0) + float(field_value(entry, 'hours') or 0)
    return totals


def calculate_allocation_percent(entries: Iterable, awake_hours_per_day: float = 16, days: int = 7) -> Dict[Hashable, float]:
    """Jaki % dostępnego czasu (godziny na jawie * dni) poszedł na każdy bucket."""
    available = awake_hours_per_day * days
    if available <= 0:
        return {}
    return {
        bucket_id: round_half_up(hours / available * 100)
        for bucket_id, hours in calculate_hours_by_group(entries).items()
    }


def target_percent_to_hours(percent: float, hours_per_day: float = 16, days: int = 7) -> float:
    return round_half_up(float(percent) / 100 * hours_per_day * days)


def calculate_pacing_status(actual: float, target: float, tolerance: float = 0.1) -> PacingStatus:
    actual = float(actual)
    target = float(target)

    if actual == 0 and target == 0:
        # Nieaktywny cel nie jest "w tyle"
        return PacingStatus.ON_TRACK
    if target <= 0:
        # Brak celu, a czas jest zalogowany -> wszystko ponad plan
        return PacingStatus.AHEAD

    ratio = actual / target
    # Dokładnie w celu = on_track, "ahead" dopiero powyżej
    if ratio > 1:
        return PacingStatus.AHEAD
    if ratio >= 1 - tolerance:
        return PacingStatus.ON_TRACK
    if ratio >= 1 - tolerance * 2:
        return PacingStatus.SLIGHTLY_BEHIND
    return PacingStatus.BEHIND


def pacing_css_class(status) -> str:
    try:
        return PACING_CSS[PacingStatus(status)]
    except ValueError:
        return 'text-muted'


def calculate_weekly_capacity(targets: Iterable, awake_hours_per_day: float = 16) -> Dict[str, float]:
    total_percent = sum(float(field_value(t, 'target_percent') or 0) for t in targets)
    weekly_hours = awake_hours_per_day * 7
    allocated = total_percent / 100 * weekly_hours
    return {
        'allocated': round_half_up(allocated),
        'unallocated': round_half_up(weekly_hours - allocated),
        'total_percent': round_half_up(total_percent),
    }


def timer_seconds_to_hours(seconds: int) -> float:
    """Czas ze stopera -> godziny (2 miejsca po przecinku). Poniżej minuty nie zapisujemy."""
    if seconds < MIN_TIMER_SECONDS:
        raise ValueError("Timer must run for at least one minute")
    return round_half_up(seconds / 3600, 2)


def build_bucket_pacing(buckets, entries, targets, awake_hours_per_day: float, days: int,
                        tolerance: float = 0.1):
    """
    Wiersze "faktycznie vs cel" dla aktywnych bucketów.
    Cel procentowy przeliczamy na godziny dla podanej liczby dni.
    """
    hours_by_bucket = calculate_hours_by_group(entries)
    target_by_bucket = {field_value(t, 'bucket_id'): float(field_value(t, 'target_percent')) for t in targets}

    rows = []
    for bucket in buckets:
        bucket_id = field_value(bucket, 'id')
        actual = round_half_up(hours_by_bucket.get(bucket_id, 0.0))
        percent = target_by_bucket.get(bucket_id)
        target_hours = target_percent_to_hours(percent, awake_hours_per_day, days) if percent is not None else 0.0
        if actual == 0 and percent is None:
            continue
        rows.append({
            'bucket': bucket,
            'actual_hours': actual,
            'target_percent': percent,
            'target_hours': target_hours,
            'status': calculate_pacing_status(actual, target_hours, tolerance),
        })
    return sorted(rows, key=lambda r: r['actual_hours'], reverse=True)
