from datetime import date, timedelta
from types import SimpleNamespace

from apps.reports.domain.trends import (
    TrendLabel, TrendWindow, bucket_weekly_hours, build_daily_series, completion_rate,
    label_trend, summarize_goal_progress, summarize_measure, summarize_time_allocation,
)

TODAY = date(2024, 1, 31)


def test_trend_windows():
    assert [w.value for w in TrendWindow] == [7, 30, 90]


def test_label_trend_up_when_second_half_exceeds_margin():
    values = [5, 5, 5, 5, 5.5, 5.5, 5.5, 5.5]
    assert label_trend(values) == TrendLabel.UP


def test_label_trend_flat_within_margin():
    values = [5, 5, 5, 5, 5.1, 5.1, 5.1, 5.1]
    assert label_trend(values) == TrendLabel.FLAT


def test_label_trend_down():
    assert label_trend([8, 8, 6, 6]) == TrendLabel.DOWN


def test_label_trend_needs_four_points():
    assert label_trend([1, 10, 10]) == TrendLabel.FLAT


def test_label_trend_splits_odd_length_at_floor_midpoint():
    # [1, 1] vs [1, 2, 2] -> 1.0 vs 1.67
    assert label_trend([1, 1, 1, 2, 2]) == TrendLabel.UP


def test_daily_series_skips_missing_days_and_window():
    points = [
        (TODAY, 7),
        (TODAY - timedelta(days=2), 5),
        (TODAY - timedelta(days=10), 1),
    ]
    series = build_daily_series(points, 7, TODAY)
    assert series == [(TODAY - timedelta(days=2), 5.0), (TODAY, 7.0)]


def test_completion_rate():
    responses = [{'score': 1}, {'score': 0}, {'score': 1}]
    assert completion_rate(responses) == 67
    assert completion_rate([]) == 0


def response(day_offset, score):
    return {'check_in_date': TODAY - timedelta(days=day_offset), 'score': score}


def test_summarize_scale_measure():
    measure = {'question_type': 'scale'}
    responses = [response(3, 4), response(2, 4), response(1, 8), response(0, 8)]
    trend = summarize_measure(measure, responses, 7, TODAY)
    assert trend.average == 6.0
    assert trend.completion_rate is None
    assert trend.check_in_count == 4
    assert trend.trend == TrendLabel.UP
    assert len(trend.daily) == 4


def test_summarize_binary_measure():
    measure = {'question_type': 'binary'}
    responses = [response(2, 1), response(1, 0), response(0, 1)]
    trend = summarize_measure(measure, responses, 7, TODAY)
    assert trend.completion_rate == 67
    assert trend.average == 2


def test_bucket_weekly_hours_uses_iso_weeks():
    entries = [
        {'entry_date': date(2024, 1, 1), 'hours': 1},
        {'entry_date': date(2024, 1, 7), 'hours': 2},
        {'entry_date': date(2024, 1, 8), 'hours': 3},
    ]
    assert bucket_weekly_hours(entries) == [('2024-W01', 3.0), ('2024-W02', 3.0)]


def test_summarize_time_allocation():
    buckets = [SimpleNamespace(id=1, name='Praca'), SimpleNamespace(id=2, name='Sport'), SimpleNamespace(id=3, name='Nic')]
    entries = [
        {'bucket_id': 1, 'hours': 6, 'entry_date': date(2024, 1, 30)},
        {'bucket_id': 2, 'hours': 2, 'entry_date': date(2024, 1, 30)},
        {'bucket_id': 1, 'hours': 2, 'entry_date': date(2024, 1, 31)},
    ]
    targets = [{'bucket_id': 2, 'target_percent': 30}]

    summary = summarize_time_allocation(entries, buckets, targets, days_back=7)

    assert summary['total_hours'] == 10
    assert summary['avg_per_day'] == 1.4
    assert summary['days_tracked'] == 2
    assert [row['bucket'].name for row in summary['buckets']] == ['Praca', 'Sport']
    sport = summary['buckets'][1]
    assert sport['actual_percent'] == 20.0
    assert sport['difference'] == -10.0
    assert summary['daily'] == [(date(2024, 1, 30), 8.0), (date(2024, 1, 31), 2.0)]


def log(offset, value):
    return {'log_date': TODAY - timedelta(days=offset), 'value': value}


def test_goal_progress_average_mode():
    goal = {'target_value': 8, 'target_type': 'average'}
    progress = summarize_goal_progress(goal, [log(1, 6), log(0, 7)])
    assert progress.current_value == 6.5
    assert progress.progress_percent == 81.3
    assert not progress.is_count


def test_goal_progress_count_mode_is_capped():
    goal = {'target_value': 2, 'target_type': 'count'}
    progress = summarize_goal_progress(goal, [log(3, 1), log(2, 0), log(1, 1), log(0, 1)])
    assert progress.current_value == 3
    assert progress.progress_percent == 100


def test_goal_progress_without_target():
    goal = {'target_value': None, 'target_type': 'average'}
    progress = summarize_goal_progress(goal, [])
    assert progress.current_value == 0
    assert progress.progress_percent == 0
    assert progress.trend == TrendLabel.FLAT
