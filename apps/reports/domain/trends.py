# apps/reports/domain/trends.py
"""
Trendy dla strony "Trendy": serie dzienne, etykieta up/down/flat,
procent realizacji pytań tak/nie, podsumowanie czasu i postępu celów.

Brakujące dni w serii są pomijane (nie zerujemy ich).
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from apps.core.domain.dates import iso_week_key, last_n_days, parse_date
from apps.time_tracking.domain.metrics import (
    calculate_hours_by_group, calculate_total_hours, field_value, round_half_up,
)

TREND_MARGIN = 0.3
TREND_MIN_POINTS = 4


class TrendWindow(int, Enum):
    WEEK = 7
    MONTH = 30
    QUARTER = 90


class TrendLabel(str, Enum):
    UP = 'up'
    DOWN = 'down'
    FLAT = 'flat'


@dataclass
class MeasureTrend:
    measure: object
    average: float
    completion_rate: Optional[int]
    check_in_count: int
    trend: TrendLabel
    daily: List[Tuple[date, float]] = field(default_factory=list)


@dataclass
class GoalProgress:
    goal: object
    current_value: float
    target_value: Optional[float]
    progress_percent: float
    trend: TrendLabel
    log_count: int
    is_count: bool


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def build_daily_series(points: Iterable[Tuple[object, float]], days_back: int, today: date) -> List[Tuple[date, float]]:
    """
    (data, wartość) -> lista z okna ostatnich days_back dni, od najstarszego.
    Przy kilku wartościach z jednego dnia wygrywa ostatnia.
    """
    by_day: Dict[date, float] = {}
    for day, value in points:
        by_day[parse_date(day)] = float(value)
    return [(day, by_day[day]) for day in last_n_days(days_back, today) if day in by_day]


def label_trend(values: List[float], margin: float = TREND_MARGIN,
                min_points: int = TREND_MIN_POINTS) -> TrendLabel:
    """Porównanie średniej drugiej połowy z pierwszą (podział w len // 2)."""
    values = [float(v) for v in values]
    if len(values) < min_points:
        return TrendLabel.FLAT

    midpoint = len(values) // 2
    first_avg = _mean(values[:midpoint])
    second_avg = _mean(values[midpoint:])

    if second_avg > first_avg + margin:
        return TrendLabel.UP
    if second_avg < first_avg - margin:
        return TrendLabel.DOWN
    return TrendLabel.FLAT


def completion_rate(responses: Iterable) -> int:
    """Procent odpowiedzi "tak" (score == 1), zaokrąglony do całości."""
    scores = [int(field_value(r, 'score')) for r in responses]
    if not scores:
        return 0
    return int(round_half_up(scores.count(1) / len(scores) * 100, 0))


def summarize_measure(measure, responses: Iterable, days_back: int, today: date,
                      margin: float = TREND_MARGIN) -> MeasureTrend:
    """
    Podsumowanie jednego pytania w oknie.
    Dla pytań tak/nie "średnia" to liczba odpowiedzi tak.
    """
    responses = list(responses)
    daily = build_daily_series(
        ((field_value(r, 'check_in_date'), field_value(r, 'score')) for r in responses),
        days_back, today
    )
    is_binary = field_value(measure, 'question_type') == 'binary'

    if not responses:
        average, rate = 0, (0 if is_binary else None)
    elif is_binary:
        rate = completion_rate(responses)
        average = sum(1 for r in responses if int(field_value(r, 'score')) == 1)
    else:
        rate = None
        average = round_half_up(_mean([float(field_value(r, 'score')) for r in responses]))

    return MeasureTrend(
        measure=measure,
        average=average,
        completion_rate=rate,
        check_in_count=len(responses),
        trend=label_trend([value for _, value in daily], margin),
        daily=daily,
    )


def bucket_weekly_hours(entries: Iterable) -> List[Tuple[str, float]]:
    """Godziny w tygodniach ISO ('2024-W01'), posortowane po tygodniu."""
    weekly = calculate_hours_by_group(entries, key=lambda e: iso_week_key(field_value(e, 'entry_date')))
    return [(week, round_half_up(hours)) for week, hours in sorted(weekly.items())]


def summarize_time_allocation(entries: Iterable, buckets: Iterable, targets: Iterable, days_back: int) -> dict:
    """
    Rozkład czasu w oknie: suma, średnia na dzień, udział bucketów
    i różnica względem celu (w punktach procentowych).
    """
    entries = list(entries)
    total = calculate_total_hours(entries)
    target_map = {field_value(t, 'bucket_id'): float(field_value(t, 'target_percent')) for t in targets}

    rows = []
    for bucket in buckets:
        bucket_id = field_value(bucket, 'id')
        bucket_entries = [e for e in entries if field_value(e, 'bucket_id') == bucket_id]
        hours = calculate_total_hours(bucket_entries)
        target = target_map.get(bucket_id)
        actual_percent = hours / total * 100 if total > 0 else 0.0
        if hours <= 0 and target is None:
            continue
        rows.append({
            'bucket': bucket,
            'hours': round_half_up(hours),
            'target_percent': target,
            'actual_percent': round_half_up(actual_percent),
            'difference': round_half_up(actual_percent - target) if target is not None else 0.0,
            'weekly': bucket_weekly_hours(bucket_entries),
        })
    rows.sort(key=lambda r: r['hours'], reverse=True)

    daily = calculate_hours_by_group(entries, key=lambda e: parse_date(field_value(e, 'entry_date')))

    return {
        'total_hours': round_half_up(total),
        'avg_per_day': round_half_up(total / days_back) if total > 0 and days_back else 0.0,
        'days_tracked': len(daily),
        'buckets': rows,
        'daily': [(day, round_half_up(hours)) for day, hours in sorted(daily.items())],
    }


def summarize_goal_progress(goal, logs: Iterable, is_binary: bool = False,
                            margin: float = TREND_MARGIN) -> GoalProgress:
    """
    Postęp celu z jego wpisów z check-inów.
    Cel "count" (albo pytanie tak/nie) liczy odpowiedzi tak, pozostałe biorą średnią.
    """
    logs = sorted(logs, key=lambda log: parse_date(field_value(log, 'log_date')))
    values = [float(field_value(log, 'value')) for log in logs]
    target = field_value(goal, 'target_value')
    target = float(target) if target is not None else None
    is_count = is_binary or field_value(goal, 'target_type') == 'count'

    if is_count:
        current = float(sum(1 for v in values if v == 1))
    else:
        current = round_half_up(_mean(values)) if values else 0.0

    percent = min(100.0, current / target * 100) if target else 0.0

    return GoalProgress(
        goal=goal,
        current_value=current,
        target_value=target,
        progress_percent=round_half_up(percent),
        trend=label_trend(values, margin),
        log_count=len(values),
        is_count=is_count,
    )
