import pytest

from apps.time_tracking.domain.metrics import (
    PacingStatus,
    build_bucket_pacing,
    calculate_allocation_percent,
    calculate_average,
    calculate_hours_by_group,
    calculate_pacing_status,
    calculate_total_hours,
    calculate_weekly_capacity,
    pacing_css_class,
    round_half_up,
    target_percent_to_hours,
    timer_seconds_to_hours,
)


def test_average_of_empty_list_is_zero():
    assert calculate_average([]) == 0


def test_average_rounds_to_one_decimal():
    assert calculate_average([{'score': 4}, {'score': 6}]) == 5
    assert calculate_average([{'score': 7}, {'score': 8}, {'score': 8}]) == 7.7


def test_average_of_other_field():
    assert calculate_average([{'value': 1}, {'value': 0}], field='value') == 0.5


def test_round_half_up():
    assert round_half_up(0.25) == 0.3
    assert round_half_up(2.675, 2) == 2.68


def test_totals_and_grouping():
    entries = [
        {'bucket_id': 1, 'hours': 1.5},
        {'bucket_id': 2, 'hours': 2},
        {'bucket_id': 1, 'hours': 0.5},
    ]
    assert calculate_total_hours(entries) == 4
    assert calculate_hours_by_group(entries) == {1: 2.0, 2: 2.0}
    by_size = calculate_hours_by_group(entries, key=lambda e: e['hours'] >= 1)
    assert by_size == {True: 3.5, False: 0.5}


def test_grouping_is_order_independent():
    entries = [{'bucket_id': i % 3, 'hours': i} for i in range(10)]
    assert calculate_hours_by_group(entries) == calculate_hours_by_group(list(reversed(entries)))


def test_allocation_percent():
    entries = [{'bucket_id': 1, 'hours': 11.2}]
    assert calculate_allocation_percent(entries, awake_hours_per_day=16, days=7) == {1: 10.0}


def test_target_percent_to_hours():
    assert target_percent_to_hours(10, 16, 7) == 11.2
    assert target_percent_to_hours(25, 16, 1) == 4.0


@pytest.mark.parametrize('actual, target, expected', [
    (10, 10, PacingStatus.ON_TRACK),
    (12, 10, PacingStatus.AHEAD),
    (9, 10, PacingStatus.ON_TRACK),
    (8, 10, PacingStatus.SLIGHTLY_BEHIND),
    (5, 10, PacingStatus.BEHIND),
    (0, 0, PacingStatus.ON_TRACK),
    (3, 0, PacingStatus.AHEAD),
])
def test_pacing_status(actual, target, expected):
    assert calculate_pacing_status(actual, target, 0.1) == expected


def test_pacing_css_class():
    assert pacing_css_class(PacingStatus.BEHIND) == 'text-danger'
    assert pacing_css_class('on_track') == 'text-success'
    assert pacing_css_class('nonsense') == 'text-muted'


def test_weekly_capacity():
    capacity = calculate_weekly_capacity([{'target_percent': 25}, {'target_percent': 25}], 16)
    assert capacity == {'allocated': 56.0, 'unallocated': 56.0, 'total_percent': 50.0}


def test_timer_seconds_to_hours():
    assert timer_seconds_to_hours(5400) == 1.5
    assert timer_seconds_to_hours(60) == 0.02
    with pytest.raises(ValueError):
        timer_seconds_to_hours(59)


def test_build_bucket_pacing_skips_idle_buckets_without_target():
    buckets = [{'id': 1, 'name': 'A'}, {'id': 2, 'name': 'B'}, {'id': 3, 'name': 'C'}]
    entries = [{'bucket_id': 1, 'hours': 2}, {'bucket_id': 2, 'hours': 5}]
    targets = [{'bucket_id': 1, 'target_percent': 25}]

    rows = build_bucket_pacing(buckets, entries, targets, awake_hours_per_day=16, days=1)

    assert [r['bucket']['id'] for r in rows] == [2, 1]
    first_bucket = rows[1]
    assert first_bucket['target_hours'] == 4.0
    assert first_bucket['status'] == PacingStatus.BEHIND
    assert rows[0]['status'] == PacingStatus.AHEAD
